from __future__ import annotations

from typing import Any, Dict, List

from ..do_client import DigitalOceanClient, api_path
from . import ResourceDefinition, ToolDefinition, ToolRegistry
from .params import Param
from .results import message

# Keys created here may read and write every bucket of the account.
FULL_ACCESS_GRANT = {"bucket": "", "permission": "fullaccess"}


def spaces_key_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def create_key(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "grants": [dict(FULL_ACCESS_GRANT)]}
        return await client.post("/spaces/keys", json=body, key="key")

    async def update_key(args: Dict[str, Any]) -> Any:
        return await client.put(
            api_path("spaces", "keys", args["ID"]), json={"name": args["Name"]}, key="key"
        )

    async def delete_key(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("spaces", "keys", args["ID"]))
        return message("Spaces key deleted successfully")

    return [
        ToolDefinition(
            name="digitalocean-spaces-key-create",
            description="Create a new Spaces key",
            params=[Param("Name", required=True, description="Name for the Spaces key")],
            handler=create_key,
        ),
        ToolDefinition(
            name="digitalocean-spaces-key-update",
            description="Update an existing Spaces key",
            params=[
                Param("ID", required=True, description="ID of the Spaces key to update"),
                Param("Name", required=True, description="New name for the Spaces key"),
            ],
            handler=update_key,
        ),
        ToolDefinition(
            name="digitalocean-spaces-key-delete",
            description="Delete a Spaces key",
            params=[Param("ID", required=True, description="ID of the Spaces key to delete")],
            handler=delete_key,
        ),
    ]


def spaces_key_resources(client: DigitalOceanClient) -> List[ResourceDefinition]:
    async def all_keys(args: Dict[str, Any]) -> Any:
        return await client.get("/spaces/keys", key="keys")

    async def one_key(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("spaces", "keys", args["access_key"]), key="key")

    return [
        ResourceDefinition(
            uri="spaces_keys://all",
            name="Spaces Keys List",
            description="Returns all Spaces keys",
            handler=all_keys,
        ),
        ResourceDefinition(
            uri="spaces_keys://{access_key}",
            name="Spaces Key",
            description="Returns Spaces key information",
            handler=one_key,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    for tool in spaces_key_tools(client):
        registry.add_tool(tool)
    for resource in spaces_key_resources(client):
        registry.add_resource(resource)
