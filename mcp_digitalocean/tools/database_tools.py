"""
Managed database tools: clusters, users, trusted sources, logical databases,
connection pools, read replicas and Kafka topics.

These tools take lowercase field names (`id`, `name`, `page`, ...) except for
the trusted source, database, pool and replica tools, which address the
cluster as `ID`. Pagination has no fixed default here: when neither `page`
nor `per_page` is given the API picks its own.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..do_client import DigitalOceanClient, api_path
from ..models import DatabaseFirewallRule, OnlineMigrationSource
from . import ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options
from .results import caller_error, message


def _cluster_id(name: str = "id", description: str = "The cluster UUID") -> Param:
    # "id" and "ID" tools historically word the message differently.
    text = "Cluster id is required" if name == "id" else "Cluster ID is required"
    return Param(name, required=True, description=description, required_message=text)


def _page_params() -> List[Param]:
    return [
        Param(
            "page",
            Kind.INTEGER,
            from_text=True,
            description="Page number for pagination (optional, integer as string)",
        ),
        Param(
            "per_page",
            Kind.INTEGER,
            from_text=True,
            description="Number of results per page (optional, integer)",
        ),
    ]


def _pages(args: Dict[str, Any]) -> Any:
    return list_options(args, page="page", per_page="per_page")


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in body.items() if v is not None}


def _databases(cluster_id: str, *parts: Any) -> str:
    return api_path("databases", cluster_id, *parts)


def cluster_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_clusters(args: Dict[str, Any]) -> Any:
        return await client.get("/databases", options=_pages(args), key="databases")

    async def get_cluster(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"]), key="database")

    async def get_ca(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "ca"), key="ca")

    async def create_cluster(args: Dict[str, Any]) -> Any:
        body = {
            "name": args["name"],
            "engine": args["engine"],
            "version": args["version"],
            "region": args["region"],
            "size": args["size"],
            "num_nodes": args["num_nodes"],
            "tags": args["tags"],
        }
        return await client.post("/databases", json=body, key="database")

    async def delete_cluster(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["id"]))
        return message("Cluster deleted successfully")

    async def resize_cluster(args: Dict[str, Any]) -> Any:
        body = _compact(
            {
                "size": args["size"],
                "num_nodes": args["num_nodes"] or None,
                "storage_size_mib": args["storage_size_mib"] or None,
            }
        )
        if not body:
            return caller_error(
                "At least one of size, num_nodes, or storage_size_mib must be provided"
            )
        await client.put(_databases(args["id"], "resize"), json=body)
        return message("Cluster resize initiated successfully")

    async def list_backups(args: Dict[str, Any]) -> Any:
        return await client.get(
            _databases(args["id"], "backups"), options=_pages(args), key="backups"
        )

    async def list_database_options(args: Dict[str, Any]) -> Any:
        return await client.get("/databases/options", key="options")

    async def upgrade_major_version(args: Dict[str, Any]) -> Any:
        await client.put(_databases(args["id"], "upgrade"), json={"version": args["version"]})
        return message("Major version upgrade initiated successfully")

    async def start_online_migration(args: Dict[str, Any]) -> Any:
        source: OnlineMigrationSource = args["source"]
        body = _compact(
            {
                "source": source.model_dump(exclude_none=True),
                "disable_ssl": args["disable_ssl"],
                "ignore_dbs": args["ignore_dbs"] or None,
            }
        )
        return await client.put(_databases(args["id"], "online-migration"), json=body)

    async def stop_online_migration(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["id"], "online-migration", args["migration_id"]))
        return message("Online migration stopped successfully")

    async def get_online_migration(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "online-migration"))

    return [
        ToolDefinition(
            name="db-cluster-list",
            description="Get list of clusters",
            params=_page_params(),
            handler=list_clusters,
        ),
        ToolDefinition(
            name="db-cluster-get",
            description="Get a cluster by its id",
            params=[_cluster_id(description="The id of the cluster to retrieve")],
            handler=get_cluster,
        ),
        ToolDefinition(
            name="db-cluster-get-ca",
            description="Get the CA certificate for a cluster by its id",
            params=[_cluster_id(description="The id of the cluster to retrieve the CA for")],
            handler=get_ca,
        ),
        ToolDefinition(
            name="db-cluster-create",
            description="Create a new database cluster",
            params=[
                Param("name", required=True, description="The name of the cluster"),
                Param(
                    "engine",
                    required=True,
                    description="The engine slug (e.g., valkey, pg, mysql, etc.)",
                ),
                Param("version", required=True, description="The version of the engine"),
                Param("region", required=True, description="The region slug (e.g., nyc1)"),
                Param("size", required=True, description="The size slug (e.g., db-s-2vcpu-4gb)"),
                Param("num_nodes", Kind.INTEGER, required=True, description="The number of nodes"),
                Param(
                    "tags",
                    Kind.ARRAY,
                    from_text=True,
                    description="Comma-separated tags to apply to the cluster",
                ),
            ],
            handler=create_cluster,
        ),
        ToolDefinition(
            name="db-cluster-delete",
            description="Delete a database cluster by its id",
            params=[_cluster_id(description="The id of the cluster to delete")],
            handler=delete_cluster,
        ),
        ToolDefinition(
            name="db-cluster-resize",
            description=(
                "Resize a database cluster by its id. At least one of size, num_nodes, "
                "or storage_size_mib must be provided."
            ),
            params=[
                _cluster_id(description="The id of the cluster to resize"),
                Param("size", description="The new size slug (e.g., db-s-2vcpu-4gb)"),
                Param("num_nodes", Kind.INTEGER, description="The new number of nodes"),
                Param("storage_size_mib", Kind.INTEGER, description="The new storage size in MiB"),
            ],
            handler=resize_cluster,
        ),
        ToolDefinition(
            name="db-cluster-list-backups",
            description="List backups for a database cluster by its id",
            params=[_cluster_id(description="The id of the cluster to list backups for"), *_page_params()],
            handler=list_backups,
        ),
        ToolDefinition(
            name="db-cluster-list-options",
            description=(
                "List available database options (engines, versions, sizes, regions, etc) "
                "for DigitalOcean managed databases."
            ),
            handler=list_database_options,
        ),
        ToolDefinition(
            name="db-cluster-upgrade-major-version",
            description=(
                "Upgrade the major version of a database cluster by its id. "
                "Requires the target version."
            ),
            params=[
                _cluster_id(),
                Param(
                    "version",
                    required=True,
                    description="The target major version to upgrade to (e.g., 15 for PostgreSQL)",
                    required_message="Target version is required",
                ),
            ],
            handler=upgrade_major_version,
        ),
        ToolDefinition(
            name="db-cluster-start-online-migration",
            description="Start an online migration for a database cluster by its id.",
            params=[
                _cluster_id(),
                Param(
                    "source",
                    Kind.OBJECT,
                    required=True,
                    schema=OnlineMigrationSource,
                    description=(
                        "Source database connection: host, port, dbname, username, password"
                    ),
                    required_message=(
                        "Missing or invalid 'source' object (expected structured object)"
                    ),
                ),
                Param(
                    "disable_ssl",
                    Kind.BOOLEAN,
                    default=False,
                    description="Disable SSL on source connection (optional)",
                ),
                Param(
                    "ignore_dbs",
                    Kind.ARRAY,
                    from_text=True,
                    description="Comma-separated list of databases to ignore",
                ),
            ],
            handler=start_online_migration,
        ),
        ToolDefinition(
            name="db-cluster-stop-online-migration",
            description=(
                "Stop an online migration for a database cluster by its id and migration_id."
            ),
            params=[
                _cluster_id(),
                Param(
                    "migration_id",
                    required=True,
                    description="The migration id to stop",
                    required_message="migration_id is required",
                ),
            ],
            handler=stop_online_migration,
        ),
        ToolDefinition(
            name="db-cluster-get-migration",
            description="Get the online migration status for a database cluster by its id.",
            params=[_cluster_id()],
            handler=get_online_migration,
        ),
    ]


def user_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_user(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "users", args["user"]), key="user")

    async def list_users(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "users"), options=_pages(args), key="users")

    async def create_user(args: Dict[str, Any]) -> Any:
        mysql_settings: Optional[Dict[str, Any]] = None
        if args["mysql_auth_plugin"]:
            mysql_settings = {"auth_plugin": args["mysql_auth_plugin"]}
        body = _compact(
            {
                "name": args["name"],
                "mysql_settings": mysql_settings,
                "settings": args["settings_json"],
            }
        )
        return await client.post(_databases(args["id"], "users"), json=body, key="user")

    async def update_user(args: Dict[str, Any]) -> Any:
        body = _compact({"settings": args["settings_json"]})
        return await client.put(
            _databases(args["id"], "users", args["user"]), json=body, key="user"
        )

    async def delete_user(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["id"], "users", args["user"]))
        return message("User deleted successfully")

    def user(description: str = "The user name", name: str = "user") -> Param:
        return Param(
            name, required=True, description=description, required_message="User name is required"
        )

    settings = Param(
        "settings_json",
        Kind.OBJECT,
        from_text=True,
        description="Raw JSON for DatabaseUserSettings (optional)",
    )

    return [
        ToolDefinition(
            name="digitalocean-dbaascluster-get-user",
            description="Get a database user by cluster id and user name",
            params=[_cluster_id(description="The cluster id (UUID)"), user()],
            handler=get_user,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-list-users",
            description="List database users for a cluster by its id",
            params=[_cluster_id(description="The cluster id (UUID)"), *_page_params()],
            handler=list_users,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-create-user",
            description="Create a database user for a cluster by its id",
            params=[
                _cluster_id(description="The cluster id (UUID)"),
                user(name="name"),
                Param(
                    "mysql_auth_plugin",
                    description="MySQL auth plugin (optional, e.g., mysql_native_password)",
                ),
                settings,
            ],
            handler=create_user,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-update-user",
            description="Update a database user for a cluster by its id and user name",
            params=[_cluster_id(description="The cluster id (UUID)"), user(), settings],
            handler=update_user,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-delete-user",
            description="Delete a database user by cluster id and user name",
            params=[_cluster_id(), user("The user name to delete")],
            handler=delete_user,
        ),
    ]


def firewall_rule_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_rules(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "firewall"), key="rules")

    async def update_rules(args: Dict[str, Any]) -> Any:
        rules = [rule.model_dump(exclude_none=True) for rule in args["rules_json"]]
        await client.put(_databases(args["ID"], "firewall"), json={"rules": rules})
        return message("Firewall rules updated successfully")

    return [
        ToolDefinition(
            name="digitalocean-dbaascluster-get-firewall-rules",
            description="Get the firewall rules for a cluster by its ID",
            params=[_cluster_id("ID")],
            handler=get_rules,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-update-firewall-rules",
            description="Update the firewall rules for a cluster by its ID",
            params=[
                _cluster_id("ID"),
                Param(
                    "rules_json",
                    Kind.OBJECT,
                    required=True,
                    from_text=True,
                    schema=List[DatabaseFirewallRule],
                    description="JSON array of firewall rules to set",
                    required_message="rules_json is required (JSON array of firewall rules)",
                ),
            ],
            handler=update_rules,
        ),
    ]


def db_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_dbs(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "dbs"), options=_pages(args), key="dbs")

    async def create_db(args: Dict[str, Any]) -> Any:
        return await client.post(_databases(args["ID"], "dbs"), json={"name": args["name"]}, key="db")

    async def get_db(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "dbs", args["name"]), key="db")

    async def delete_db(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["ID"], "dbs", args["name"]))
        return message("Database deleted successfully")

    def db_name(description: str) -> Param:
        return Param(
            "name",
            required=True,
            description=description,
            required_message="Database name is required",
        )

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-list-dbs",
            description="List databases for a cluster by its ID",
            params=[_cluster_id("ID"), *_page_params()],
            handler=list_dbs,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-create-db",
            description="Create a database for a cluster by its ID",
            params=[_cluster_id("ID"), db_name("The database name to create")],
            handler=create_db,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-get-db",
            description="Get a database for a cluster by its ID and database name",
            params=[_cluster_id("ID"), db_name("The database name to get")],
            handler=get_db,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-delete-db",
            description="Delete a database for a cluster by its ID and database name",
            params=[_cluster_id("ID"), db_name("The database name to delete")],
            handler=delete_db,
        ),
    ]


def pool_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_pools(args: Dict[str, Any]) -> Any:
        return await client.get(
            _databases(args["ID"], "pools"), options=_pages(args), key="pools"
        )

    async def create_pool(args: Dict[str, Any]) -> Any:
        body = {
            "name": args["name"],
            "user": args["user"],
            "db": args["database"],
            "mode": args["mode"],
            "size": args["size"],
        }
        return await client.post(_databases(args["ID"], "pools"), json=body, key="pool")

    async def get_pool(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "pools", args["name"]), key="pool")

    async def delete_pool(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["ID"], "pools", args["name"]))
        return message("Pool deleted successfully")

    async def update_pool(args: Dict[str, Any]) -> Any:
        body = _compact(
            {
                "user": args["user"],
                "db": args["database"],
                "mode": args["mode"],
                "size": args["size"],
            }
        )
        await client.put(_databases(args["ID"], "pools", args["name"]), json=body)
        return message("Pool updated successfully")

    def pool_name(description: str) -> Param:
        return Param(
            "name", required=True, description=description, required_message="Pool name is required"
        )

    pool_settings = [
        Param(
            "database",
            required=True,
            description="The database for the pool",
            required_message="Database is required",
        ),
        Param(
            "mode",
            required=True,
            description="The pool mode",
            required_message="Mode is required",
        ),
        Param(
            "size",
            Kind.INTEGER,
            required=True,
            description="The pool size (number of connections)",
            required_message="Size is required and must be a number",
        ),
    ]

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-list-pools",
            description="List connection pools for a cluster by its ID",
            params=[_cluster_id("ID"), *_page_params()],
            handler=list_pools,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-create-pool",
            description="Create a connection pool for a cluster by its ID",
            params=[
                _cluster_id("ID"),
                Param(
                    "user",
                    required=True,
                    description="The user for the pool",
                    required_message="User is required",
                ),
                pool_name("The pool name"),
                *pool_settings,
            ],
            handler=create_pool,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-get-pool",
            description="Get a connection pool for a cluster by its ID and pool name",
            params=[_cluster_id("ID"), pool_name("The pool name to get")],
            handler=get_pool,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-delete-pool",
            description="Delete a connection pool for a cluster by its ID and pool name",
            params=[_cluster_id("ID"), pool_name("The pool name to delete")],
            handler=delete_pool,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-update-pool",
            description="Update a connection pool for a cluster by its ID and pool name",
            params=[
                _cluster_id("ID"),
                pool_name("The pool name to update"),
                Param("user", description="The user for the pool (optional)"),
                *pool_settings,
            ],
            handler=update_pool,
        ),
    ]


def replica_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_replica(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "replicas", args["name"]), key="replica")

    async def list_replicas(args: Dict[str, Any]) -> Any:
        return await client.get(
            _databases(args["ID"], "replicas"), options=_pages(args), key="replicas"
        )

    async def create_replica(args: Dict[str, Any]) -> Any:
        body = _compact(
            {
                "name": args["name"],
                "region": args["region"],
                "size": args["size"],
                "private_network_uuid": args["private_network_uuid"],
                "tags": args["tags"],
                "storage_size_mib": args["storage_size_mib"],
            }
        )
        return await client.post(_databases(args["ID"], "replicas"), json=body, key="replica")

    async def delete_replica(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["ID"], "replicas", args["name"]))
        return message("Replica deleted successfully")

    async def promote_replica(args: Dict[str, Any]) -> Any:
        await client.put(_databases(args["ID"], "replicas", args["name"], "promote"))
        return message("Replica promoted to primary successfully")

    def replica_name(description: str) -> Param:
        return Param(
            "name",
            required=True,
            description=description,
            required_message="Replica name is required",
        )

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-get-replica",
            description="Get a replica for a cluster by its ID and replica name",
            params=[_cluster_id("ID"), replica_name("The replica name to get")],
            handler=get_replica,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-list-replicas",
            description="List replicas for a cluster by its ID",
            params=[_cluster_id("ID"), *_page_params()],
            handler=list_replicas,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-create-replica",
            description="Create a replica for a cluster by its ID",
            params=[
                _cluster_id("ID"),
                replica_name("The replica name to create"),
                Param(
                    "region",
                    required=True,
                    description="The region for the replica",
                    required_message="Replica region is required",
                ),
                Param(
                    "size",
                    required=True,
                    description="The size slug for the replica",
                    required_message="Replica size is required",
                ),
                Param("private_network_uuid", description="The private network UUID (optional)"),
                Param(
                    "tags",
                    Kind.ARRAY,
                    from_text=True,
                    description="Comma-separated tags to apply to the replica (optional)",
                ),
                Param(
                    "storage_size_mib",
                    Kind.INTEGER,
                    description="The storage size in MiB (optional)",
                ),
            ],
            handler=create_replica,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-delete-replica",
            description="Delete a replica for a cluster by its ID and replica name",
            params=[_cluster_id("ID"), replica_name("The replica name to delete")],
            handler=delete_replica,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-promote-replica",
            description="Promote a replica to primary for a cluster by its ID and replica name",
            params=[_cluster_id("ID"), replica_name("The replica name to promote")],
            handler=promote_replica,
        ),
    ]


def kafka_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_topics(args: Dict[str, Any]) -> Any:
        return await client.get(
            _databases(args["id"], "topics"), options=_pages(args), key="topics"
        )

    def topic_body(args: Dict[str, Any]) -> Dict[str, Any]:
        return _compact(
            {
                "partition_count": args["partition_count"],
                "replication_factor": args["replication_factor"],
                "config": args["config_json"],
            }
        )

    async def create_topic(args: Dict[str, Any]) -> Any:
        body = {"name": args["name"], **topic_body(args)}
        return await client.post(_databases(args["id"], "topics"), json=body, key="topic")

    async def get_topic(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "topics", args["name"]), key="topic")

    async def delete_topic(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["id"], "topics", args["name"]))
        return message("Topic deleted successfully")

    async def update_topic(args: Dict[str, Any]) -> Any:
        await client.put(_databases(args["id"], "topics", args["name"]), json=topic_body(args))
        return message("Topic updated successfully")

    async def get_config(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["id"], "config"), key="config")

    async def update_config(args: Dict[str, Any]) -> Any:
        await client.patch(_databases(args["id"], "config"), json={"config": args["config_json"]})
        return message("Kafka config updated successfully")

    def topic_name(description: str) -> Param:
        return Param(
            "name", required=True, description=description, required_message="Topic name is required"
        )

    topic_settings = [
        Param(
            "partition_count",
            Kind.INTEGER,
            from_text=True,
            description="Number of partitions (optional, integer as string)",
        ),
        Param(
            "replication_factor",
            Kind.INTEGER,
            from_text=True,
            description="Replication factor (optional, integer as string)",
        ),
        Param(
            "config_json",
            Kind.OBJECT,
            from_text=True,
            description="TopicConfig as JSON (optional)",
        ),
    ]

    return [
        ToolDefinition(
            name="digitalocean-databases-cluster-list-topics",
            description="List topics for a Kafka database cluster by its id",
            params=[_cluster_id(), *_page_params()],
            handler=list_topics,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-create-topic",
            description=(
                "Create a topic for a Kafka database cluster by its id. Accepts name (required), "
                "partition_count, replication_factor, and config_json (TopicConfig as JSON, "
                "all optional)."
            ),
            params=[_cluster_id(), topic_name("The topic name to create"), *topic_settings],
            handler=create_topic,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-get-topic",
            description="Get a topic for a Kafka database cluster by its id and topic name.",
            params=[_cluster_id(), topic_name("The topic name to get")],
            handler=get_topic,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-delete-topic",
            description="Delete a topic for a Kafka database cluster by its id and topic name.",
            params=[_cluster_id(), topic_name("The topic name to delete")],
            handler=delete_topic,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-update-topic",
            description=(
                "Update a topic for a Kafka database cluster by its id and topic name. Accepts "
                "partition_count, replication_factor, and config_json (TopicConfig as JSON, "
                "all optional)."
            ),
            params=[_cluster_id(), topic_name("The topic name to update"), *topic_settings],
            handler=update_topic,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-get-kafka-config",
            description="Get the Kafka config for a cluster by its id",
            params=[_cluster_id()],
            handler=get_config,
        ),
        ToolDefinition(
            name="digitalocean-databases-cluster-update-kafka-config",
            description=(
                "Update the Kafka config for a cluster by its id. "
                "Accepts a JSON string for the config."
            ),
            params=[
                _cluster_id(),
                Param(
                    "config_json",
                    Kind.OBJECT,
                    required=True,
                    from_text=True,
                    description="JSON for the KafkaConfig to set",
                    required_message="config_json is required (JSON for KafkaConfig)",
                ),
            ],
            handler=update_config,
        ),
    ]

# (tool name pattern, engine label, config type, cluster id field) per engine.
_ENGINE_CONFIGS = (
    ("digitalocean-dbaascluster-{}-mysql-config", "MySQL", "MySQLConfig", "ID"),
    ("digitalocean-dbaascluster-{}-postgresql-config", "PostgreSQL", "PostgreSQLConfig", "ID"),
    ("do-dbaas-cluster-{}-redis-config", "Redis", "RedisConfig", "ID"),
    ("digitalocean-dbaas-cluster-{}-mongodb-config", "MongoDB", "MongoDBConfig", "ID"),
    ("digitalocean-dbaascluster-{}-opensearch-config", "Opensearch", "OpensearchConfig", "id"),
)


def engine_config_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """
    Engine-specific settings. Every engine reads and patches the same
    `/databases/{id}/config` endpoint; only the accepted keys differ, and the
    API validates those.
    """

    def config_handlers(id_field: str, label: str):
        async def get_config(args: Dict[str, Any]) -> Any:
            return await client.get(_databases(args[id_field], "config"), key="config")

        async def update_config(args: Dict[str, Any]) -> Any:
            await client.patch(
                _databases(args[id_field], "config"), json={"config": args["config_json"]}
            )
            return message(f"{label} config updated successfully")

        return get_config, update_config

    async def get_sql_mode(args: Dict[str, Any]) -> Any:
        body = await client.get(_databases(args["ID"], "sql_mode"))
        return message((body or {}).get("sql_mode", ""))

    async def set_sql_mode(args: Dict[str, Any]) -> Any:
        if not args["modes"]:
            return caller_error("SQL modes are required (comma-separated)")
        await client.put(
            _databases(args["ID"], "sql_mode"), json={"sql_mode": ",".join(args["modes"])}
        )
        return message("SQL mode set successfully")

    tools: List[ToolDefinition] = []
    for name, label, type_name, id_field in _ENGINE_CONFIGS:
        get_config, update_config = config_handlers(id_field, label)
        tools.append(
            ToolDefinition(
                name=name.format("get"),
                description=f"Get the {label} config for a cluster by its {id_field}",
                params=[_cluster_id(id_field)],
                handler=get_config,
            )
        )
        tools.append(
            ToolDefinition(
                name=name.format("update"),
                description=(
                    f"Update the {label} config for a cluster by its {id_field}. "
                    "Accepts a JSON string for the config."
                ),
                params=[
                    _cluster_id(id_field),
                    Param(
                        "config_json",
                        Kind.OBJECT,
                        required=True,
                        from_text=True,
                        description=f"JSON for the {type_name} to set",
                        required_message=f"config_json is required (JSON for {type_name})",
                    ),
                ],
                handler=update_config,
            )
        )

    tools += [
        ToolDefinition(
            name="digitalocean-dbaascluster-get-sql-mode",
            description="Get the SQL mode for a cluster by its ID",
            params=[_cluster_id("ID")],
            handler=get_sql_mode,
        ),
        ToolDefinition(
            name="digitalocean-dbaascluster-set-sql-mode",
            description="Set the SQL mode for a cluster by its ID",
            params=[
                _cluster_id("ID"),
                Param(
                    "modes",
                    Kind.ARRAY,
                    required=True,
                    from_text=True,
                    description="Comma-separated SQL modes to set",
                    required_message="SQL modes are required (comma-separated)",
                ),
            ],
            handler=set_sql_mode,
        ),
    ]
    return tools


def logsink_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def create_logsink(args: Dict[str, Any]) -> Any:
        body = {
            "sink_name": args["sink_name"],
            "sink_type": args["sink_type"],
            "config": args["config_json"],
        }
        return await client.post(_databases(args["ID"], "logsink"), json=body, key="sink")

    async def get_logsink(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "logsink", args["logsink_id"]), key="sink")

    async def list_logsinks(args: Dict[str, Any]) -> Any:
        return await client.get(_databases(args["ID"], "logsink"), options=_pages(args), key="sinks")

    async def update_logsink(args: Dict[str, Any]) -> Any:
        await client.put(
            _databases(args["ID"], "logsink", args["logsink_id"]),
            json={"config": args["config_json"]},
        )
        return message("Logsink updated successfully")

    async def delete_logsink(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["ID"], "logsink", args["logsink_id"]))
        return message("Logsink deleted successfully")

    def logsink_id(description: str) -> Param:
        return Param("logsink_id", required=True, description=description)

    config = Param(
        "config_json",
        Kind.OBJECT,
        required=True,
        from_text=True,
        description="DatabaseLogsinkConfig as JSON (required)",
        required_message="config_json is required (JSON for DatabaseLogsinkConfig)",
    )

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-create-logsink",
            description=(
                "Create a logsink for a database cluster by its ID. Accepts sink_name, "
                "sink_type, and config_json (DatabaseLogsinkConfig as JSON, all required)."
            ),
            params=[
                _cluster_id("ID"),
                Param("sink_name", required=True, description="The logsink name to create"),
                Param(
                    "sink_type",
                    required=True,
                    description="The logsink type (e.g., opensearch, datadog, logtail, papertrail)",
                ),
                config,
            ],
            handler=create_logsink,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-get-logsink",
            description="Get a logsink for a database cluster by its ID and logsink_id.",
            params=[_cluster_id("ID"), logsink_id("The logsink ID to get")],
            handler=get_logsink,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-list-logsinks",
            description=(
                "List logsinks for a database cluster by its ID. "
                "Supports pagination: page, per_page (optional)."
            ),
            params=[_cluster_id("ID"), *_page_params()],
            handler=list_logsinks,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-update-logsink",
            description=(
                "Update a logsink for a database cluster by its ID and logsink_id. "
                "Accepts config_json (DatabaseLogsinkConfig as JSON, required)."
            ),
            params=[_cluster_id("ID"), logsink_id("The logsink ID to update"), config],
            handler=update_logsink,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-delete-logsink",
            description="Delete a logsink for a database cluster by its ID and logsink_id.",
            params=[_cluster_id("ID"), logsink_id("The logsink ID to delete")],
            handler=delete_logsink,
        ),
    ]


def index_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """OpenSearch indexes of a cluster."""

    async def list_indexes(args: Dict[str, Any]) -> Any:
        return await client.get(
            _databases(args["ID"], "indexes"), options=_pages(args), key="indexes"
        )

    async def delete_index(args: Dict[str, Any]) -> Any:
        await client.delete(_databases(args["ID"], "indexes", args["name"]))
        return message("Index deleted successfully")

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-list-indexes",
            description="List indexes for a cluster by its ID. Supports pagination: page, per_page.",
            params=[_cluster_id("ID"), *_page_params()],
            handler=list_indexes,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-delete-index",
            description="Delete an index for a cluster by its ID and index name.",
            params=[
                _cluster_id("ID"),
                Param(
                    "name",
                    required=True,
                    description="The index name to delete",
                    required_message="Index name is required",
                ),
            ],
            handler=delete_index,
        ),
    ]


def metrics_credential_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_credentials(args: Dict[str, Any]) -> Any:
        return await client.get("/databases/metrics/credentials", key="credentials")

    async def update_credentials(args: Dict[str, Any]) -> Any:
        await client.put(
            "/databases/metrics/credentials", json={"credentials": args["credentials_json"]}
        )
        return message("Metrics credentials updated successfully")

    return [
        ToolDefinition(
            name="digitalocean-dbaas-cluster-get-metrics-credentials",
            description=(
                "Get metrics credentials for DigitalOcean managed databases "
                "(no arguments required)."
            ),
            handler=get_credentials,
        ),
        ToolDefinition(
            name="digitalocean-dbaas-cluster-update-metrics-credentials",
            description=(
                "Update metrics credentials for DigitalOcean managed databases. "
                "Accepts credentials_json (JSON for DatabaseMetricsCredentials)."
            ),
            params=[
                Param(
                    "credentials_json",
                    Kind.OBJECT,
                    required=True,
                    from_text=True,
                    description="JSON for the DatabaseMetricsCredentials to set",
                    required_message=(
                        "credentials_json is required (JSON for DatabaseMetricsCredentials)"
                    ),
                ),
            ],
            handler=update_credentials,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    groups = (
        cluster_tools,
        user_tools,
        firewall_rule_tools,
        db_tools,
        pool_tools,
        replica_tools,
        kafka_tools,
        engine_config_tools,
        logsink_tools,
        index_tools,
        metrics_credential_tools,
    )
    for group in groups:
        for tool in group(client):
            registry.add_tool(tool)
