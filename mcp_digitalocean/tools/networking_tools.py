from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..do_client import DigitalOceanClient, api_path
from ..models import FirewallRule
from . import ResourceDefinition, ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options
from .results import caller_error, message

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20

# Reserved IPv4 and IPv6 addresses live under different collections.
_RESERVED_IP_PATHS = {
    "ipv4": ("reserved_ips", "reserved_ip"),
    "ipv6": ("reserved_ipv6", "reserved_ipv6"),
}


def _page_params() -> List[Param]:
    return [
        Param("Page", Kind.INTEGER, default=1, description="Page number"),
        Param("PerPage", Kind.INTEGER, default=DEFAULT_PAGE_SIZE, description="Items per page"),
    ]


def _ip_type() -> Param:
    return Param("Type", required=True, description="Type of IP ('ipv4' or 'ipv6')")


def firewall_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_firewall(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("firewalls", args["ID"]), key="firewall")

    async def list_firewalls(args: Dict[str, Any]) -> Any:
        return await client.get("/firewalls", options=list_options(args), key="firewalls")

    async def create_firewall(args: Dict[str, Any]) -> Any:
        inbound = FirewallRule(
            protocol=args["InboundProtocol"],
            port_range=args["InboundPortRange"],
            sources=[args["InboundSource"]],
        )
        outbound = FirewallRule(
            protocol=args["OutboundProtocol"],
            port_range=args["OutboundPortRange"],
            destinations=[args["OutboundDestination"]],
        )
        body = {
            "name": args["Name"],
            "inbound_rules": [inbound.to_inbound()],
            "outbound_rules": [outbound.to_outbound()],
            "droplet_ids": args["DropletIDs"],
            "tags": args["Tags"],
        }
        return await client.post("/firewalls", json=body, key="firewall")

    async def delete_firewall(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("firewalls", args["ID"]))
        return message("Firewall deleted successfully")

    async def add_droplets(args: Dict[str, Any]) -> Any:
        await client.post(
            api_path("firewalls", args["ID"], "droplets"), json={"droplet_ids": args["DropletIDs"]}
        )
        return message("Droplet(s) added to firewall successfully")

    async def remove_droplets(args: Dict[str, Any]) -> Any:
        await client.delete(
            api_path("firewalls", args["ID"], "droplets"), json={"droplet_ids": args["DropletIDs"]}
        )
        return message("Droplet(s) removed from firewall successfully")

    async def add_tags(args: Dict[str, Any]) -> Any:
        await client.post(api_path("firewalls", args["ID"], "tags"), json={"tags": args["Tags"]})
        return message("Tag(s) added to firewall successfully")

    async def remove_tags(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("firewalls", args["ID"], "tags"), json={"tags": args["Tags"]})
        return message("Tag(s) removed from firewall successfully")

    def rules_body(args: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "inbound_rules": [rule.to_inbound() for rule in args["InboundRules"]],
            "outbound_rules": [rule.to_outbound() for rule in args["OutboundRules"]],
        }

    async def add_rules(args: Dict[str, Any]) -> Any:
        if not args["InboundRules"] and not args["OutboundRules"]:
            return caller_error("At least one inbound or outbound rule must be provided")
        await client.post(api_path("firewalls", args["ID"], "rules"), json=rules_body(args))
        return message("Rule(s) added to firewall successfully")

    async def remove_rules(args: Dict[str, Any]) -> Any:
        if not args["InboundRules"] and not args["OutboundRules"]:
            return caller_error("At least one inbound or outbound rule must be provided")
        await client.delete(api_path("firewalls", args["ID"], "rules"), json=rules_body(args))
        return message("Rule(s) removed from firewall successfully")

    def firewall_id(description: str, required_message: Optional[str] = None) -> Param:
        return Param(
            "ID", required=True, description=description, required_message=required_message
        )

    droplet_ids = Param(
        "DropletIDs",
        Kind.ARRAY,
        required=True,
        items=Kind.INTEGER,
        description="Droplet IDs",
    )
    tags = Param("Tags", Kind.ARRAY, required=True, description="Tag names")
    rules = [
        Param(
            "InboundRules",
            Kind.ARRAY,
            items=Kind.OBJECT,
            schema=List[FirewallRule],
            description="Inbound rules, each with Protocol, PortRange and Sources",
        ),
        Param(
            "OutboundRules",
            Kind.ARRAY,
            items=Kind.OBJECT,
            schema=List[FirewallRule],
            description="Outbound rules, each with Protocol, PortRange and Destinations",
        ),
    ]

    return [
        ToolDefinition(
            name="digitalocean-firewall-get",
            description="Get firewall information by ID",
            params=[firewall_id("ID of the firewall", "Firewall ID is required")],
            handler=get_firewall,
        ),
        ToolDefinition(
            name="digitalocean-firewall-list",
            description="List firewalls with pagination",
            params=_page_params(),
            handler=list_firewalls,
        ),
        ToolDefinition(
            name="digitalocean-firewall-create",
            description="Create a new firewall",
            params=[
                Param("Name", required=True, description="Name of the firewall"),
                Param("InboundProtocol", required=True, description="Protocol for inbound rule"),
                Param("InboundPortRange", required=True, description="Port range for inbound rule"),
                Param("InboundSource", required=True, description="Source address for inbound rule"),
                Param("OutboundProtocol", required=True, description="Protocol for outbound rule"),
                Param(
                    "OutboundPortRange", required=True, description="Port range for outbound rule"
                ),
                Param(
                    "OutboundDestination",
                    required=True,
                    description="Destination address for outbound rule",
                ),
                Param(
                    "DropletIDs",
                    Kind.ARRAY,
                    items=Kind.INTEGER,
                    description="Droplet IDs to apply the firewall to",
                ),
                Param("Tags", Kind.ARRAY, description="Tags to apply the firewall to"),
            ],
            handler=create_firewall,
        ),
        ToolDefinition(
            name="digitalocean-firewall-delete",
            description="Delete a firewall",
            params=[firewall_id("ID of the firewall to delete")],
            handler=delete_firewall,
        ),
        ToolDefinition(
            name="digitalocean-firewall-add-droplets",
            description="Adds one or more droplets to a firewall",
            params=[firewall_id("ID of the firewall to apply to droplets"), droplet_ids],
            handler=add_droplets,
        ),
        ToolDefinition(
            name="digitalocean-firewall-remove-droplets",
            description="Removes one or more droplets from a firewall",
            params=[firewall_id("ID of the firewall to remove droplets from"), droplet_ids],
            handler=remove_droplets,
        ),
        ToolDefinition(
            name="digitalocean-firewall-add-tags",
            description="Adds one or more tags to a firewall",
            params=[firewall_id("ID of the firewall to update tags"), tags],
            handler=add_tags,
        ),
        ToolDefinition(
            name="digitalocean-firewall-remove-tags",
            description="Removes one or more tags from a firewall",
            params=[firewall_id("ID of the firewall to update tags"), tags],
            handler=remove_tags,
        ),
        ToolDefinition(
            name="digitalocean-firewall-add-rules",
            description="Add one or more rules to a firewall",
            params=[firewall_id("ID of the firewall to add rules to"), *rules],
            handler=add_rules,
        ),
        ToolDefinition(
            name="digitalocean-firewall-remove-rules",
            description="Remove one or more rules from a firewall",
            params=[firewall_id("ID of the firewall to remove rules from"), *rules],
            handler=remove_rules,
        ),
    ]


def domain_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_domain(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("domains", args["Name"]), key="domain")

    async def list_domains(args: Dict[str, Any]) -> Any:
        return await client.get("/domains", options=list_options(args), key="domains")

    async def create_domain(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "ip_address": args["IPAddress"]}
        return await client.post("/domains", json=body, key="domain")

    async def delete_domain(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("domains", args["Name"]))
        return message("Domain deleted successfully")

    async def get_record(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("domains", args["Domain"], "records", args["RecordID"]), key="domain_record"
        )

    async def list_records(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("domains", args["Domain"], "records"),
            options=list_options(args),
            key="domain_records",
        )

    async def create_record(args: Dict[str, Any]) -> Any:
        body = {"type": args["Type"], "name": args["Name"], "data": args["Data"]}
        return await client.post(
            api_path("domains", args["Domain"], "records"), json=body, key="domain_record"
        )

    async def edit_record(args: Dict[str, Any]) -> Any:
        body = {"type": args["Type"], "name": args["Name"], "data": args["Data"]}
        return await client.put(
            api_path("domains", args["Domain"], "records", args["RecordID"]),
            json=body,
            key="domain_record",
        )

    async def delete_record(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("domains", args["Domain"], "records", args["RecordID"]))
        return message("Record deleted successfully")

    domain = Param(
        "Domain", required=True, description="Domain name", required_message="Domain name is required"
    )
    record_id = Param(
        "RecordID",
        Kind.INTEGER,
        required=True,
        description="ID of the domain record",
        required_message="RecordID is required",
    )
    record_fields = [
        Param("Type", required=True, description="Record type (e.g., A, CNAME, TXT)"),
        Param("Name", required=True, description="Record name"),
        Param("Data", required=True, description="Record data"),
    ]

    return [
        ToolDefinition(
            name="domain-get",
            description="Get domain information by name",
            params=[
                Param(
                    "Name",
                    required=True,
                    description="Name of the domain",
                    required_message="Domain name is required",
                ),
            ],
            handler=get_domain,
        ),
        ToolDefinition(
            name="domain-list",
            description="List domains with pagination",
            params=_page_params(),
            handler=list_domains,
        ),
        ToolDefinition(
            name="domain-create",
            description="Create a new domain",
            params=[
                Param("Name", required=True, description="Name of the domain"),
                Param("IPAddress", required=True, description="IP address for the domain"),
            ],
            handler=create_domain,
        ),
        ToolDefinition(
            name="domain-delete",
            description="Delete a domain",
            params=[Param("Name", required=True, description="Name of the domain to delete")],
            handler=delete_domain,
        ),
        ToolDefinition(
            name="domain-record-get",
            description="Get a domain record by domain name and record ID",
            params=[domain, record_id],
            handler=get_record,
        ),
        ToolDefinition(
            name="domain-record-list",
            description="List domain records for a domain with pagination",
            params=[domain, *_page_params()],
            handler=list_records,
        ),
        ToolDefinition(
            name="domain-record-create",
            description="Create a new domain record",
            params=[domain, *record_fields],
            handler=create_record,
        ),
        ToolDefinition(
            name="domain-record-edit",
            description="Edit a domain record",
            params=[domain, record_id, *record_fields],
            handler=edit_record,
        ),
        ToolDefinition(
            name="domain-record-delete",
            description="Delete a domain record",
            params=[domain, record_id],
            handler=delete_record,
        ),
    ]


def reserved_ip_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_ipv4(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("reserved_ips", args["IP"]), key="reserved_ip")

    async def list_ipv4(args: Dict[str, Any]) -> Any:
        return await client.get("/reserved_ips", options=list_options(args), key="reserved_ips")

    async def get_ipv6(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("reserved_ipv6", args["IP"]), key="reserved_ipv6")

    async def list_ipv6(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/reserved_ipv6", options=list_options(args), key="reserved_ipv6s"
        )

    async def reserve(args: Dict[str, Any]) -> Any:
        if args["Type"] not in _RESERVED_IP_PATHS:
            return caller_error("invalid IP type. Use 'ipv4' or 'ipv6'")
        path, key = _RESERVED_IP_PATHS[args["Type"]]
        return await client.post(api_path(path), json={"region": args["Region"]}, key=key)

    async def release(args: Dict[str, Any]) -> Any:
        if args["Type"] not in _RESERVED_IP_PATHS:
            return caller_error("invalid IP type. Use 'ipv4' or 'ipv6'")
        path, _ = _RESERVED_IP_PATHS[args["Type"]]
        await client.delete(api_path(path, args["IP"]))
        return message("reserved IP released successfully")

    async def assign(args: Dict[str, Any]) -> Any:
        if args["Type"] not in _RESERVED_IP_PATHS:
            return caller_error("invalid IP type. Use 'ipv4' or 'ipv6'")
        path, _ = _RESERVED_IP_PATHS[args["Type"]]
        body = {"type": "assign", "droplet_id": args["DropletID"]}
        return await client.post(api_path(path, args["IP"], "actions"), json=body, key="action")

    async def unassign(args: Dict[str, Any]) -> Any:
        if args["Type"] not in _RESERVED_IP_PATHS:
            return caller_error("invalid IP type. Use 'ipv4' or 'ipv6'")
        path, _ = _RESERVED_IP_PATHS[args["Type"]]
        return await client.post(
            api_path(path, args["IP"], "actions"), json={"type": "unassign"}, key="action"
        )

    return [
        ToolDefinition(
            name="digitalocean-reserved-ipv4-get",
            description="Get reserved IPv4 information by IP",
            params=[
                Param(
                    "IP",
                    required=True,
                    description="The reserved IPv4 address",
                    required_message="IPv4 address is required",
                ),
            ],
            handler=get_ipv4,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ipv4-list",
            description="List reserved IPv4 addresses with pagination",
            params=_page_params(),
            handler=list_ipv4,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ipv6-get",
            description="Get reserved IPv6 information by IP",
            params=[
                Param(
                    "IP",
                    required=True,
                    description="The reserved IPv6 address",
                    required_message="IPv6 address is required",
                ),
            ],
            handler=get_ipv6,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ipv6-list",
            description="List reserved IPv6 addresses with pagination",
            params=_page_params(),
            handler=list_ipv6,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ip-reserve",
            description="Reserve a new IPv4 or IPv6",
            params=[
                Param("Region", required=True, description="Region to reserve the IP in"),
                _ip_type(),
            ],
            handler=reserve,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ip-release",
            description="Release a reserved IPv4 or IPv6",
            params=[Param("IP", required=True, description="The reserved IP to release"), _ip_type()],
            handler=release,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ip-assign",
            description="Assign a reserved IP to a droplet",
            params=[
                Param("IP", required=True, description="The reserved IP to assign"),
                Param(
                    "DropletID",
                    Kind.INTEGER,
                    required=True,
                    description="The ID of the droplet to assign the IP to",
                ),
                _ip_type(),
            ],
            handler=assign,
        ),
        ToolDefinition(
            name="digitalocean-reserved-ip-unassign",
            description="Unassign a reserved IP from a droplet",
            params=[Param("IP", required=True, description="The reserved IP to unassign"), _ip_type()],
            handler=unassign,
        ),
    ]


def certificate_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_certificate(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("certificates", args["ID"]), key="certificate")

    async def list_certificates(args: Dict[str, Any]) -> Any:
        return await client.get("/certificates", options=list_options(args), key="certificates")

    async def create_custom(args: Dict[str, Any]) -> Any:
        body = {
            "name": args["Name"],
            "type": "custom",
            "private_key": args["PrivateKey"],
            "leaf_certificate": args["LeafCertificate"],
            "certificate_chain": args["CertificateChain"],
        }
        return await client.post("/certificates", json=body, key="certificate")

    async def create_lets_encrypt(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "type": "lets_encrypt", "dns_names": args["DnsNames"]}
        return await client.post("/certificates", json=body, key="certificate")

    async def delete_certificate(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("certificates", args["ID"]))
        return message("Certificate deleted successfully")

    return [
        ToolDefinition(
            name="digitalocean-certificate-get",
            description="Get certificate information by ID",
            params=[
                Param(
                    "ID",
                    required=True,
                    description="ID of the certificate",
                    required_message="Certificate ID is required",
                ),
            ],
            handler=get_certificate,
        ),
        ToolDefinition(
            name="digitalocean-certificate-list",
            description="List certificates with pagination",
            params=_page_params(),
            handler=list_certificates,
        ),
        ToolDefinition(
            name="digitalocean-custom-certificate-create",
            description="Create a new custom certificate",
            params=[
                Param("Name", required=True, description="Name of the certificate"),
                Param("PrivateKey", required=True, description="Private key for the certificate"),
                Param("LeafCertificate", required=True, description="Leaf certificate"),
                Param("CertificateChain", required=True, description="Certificate chain"),
            ],
            handler=create_custom,
        ),
        ToolDefinition(
            name="digitalocean-lets-encrypt-certificate-create",
            description="Create a new let's encrypt certificate",
            params=[
                Param("Name", required=True, description="Name of the certificate"),
                Param(
                    "DnsNames",
                    Kind.ARRAY,
                    required=True,
                    description="DNS names of the certificate",
                ),
            ],
            handler=create_lets_encrypt,
        ),
        ToolDefinition(
            name="digitalocean-certificate-delete",
            description="Delete a certificate",
            params=[Param("ID", required=True, description="ID of the certificate to delete")],
            handler=delete_certificate,
        ),
    ]


def vpc_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def create_vpc(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "region": args["Region"]}
        return await client.post("/vpcs", json=body, key="vpc")

    async def list_members(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("vpcs", args["ID"], "members"), key="members")

    async def delete_vpc(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("vpcs", args["ID"]))
        return message("VPC deleted successfully")

    async def create_peering(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "vpc_ids": [args["Vpc1"], args["Vpc2"]]}
        return await client.post("/vpc_peerings", json=body, key="vpc_peering")

    async def delete_peering(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("vpc_peerings", args["ID"]))
        return message("VPC peering connection deleted")

    return [
        ToolDefinition(
            name="digitalocean-vpc-create",
            description="Create a new VPC",
            params=[
                Param("Name", required=True, description="Name of the VPC"),
                Param("Region", required=True, description="Region slug (e.g., nyc3)"),
            ],
            handler=create_vpc,
        ),
        ToolDefinition(
            name="digitalocean-vpc-list-members",
            description="List members of a VPC",
            params=[Param("ID", required=True, description="ID of the VPC")],
            handler=list_members,
        ),
        ToolDefinition(
            name="digitalocean-vpc-delete",
            description="Delete a VPC",
            params=[Param("ID", required=True, description="ID of the VPC to delete")],
            handler=delete_vpc,
        ),
        ToolDefinition(
            name="digitalocean-vpc-peering-create",
            description="Create a new VPC Peering connection between two VPCs",
            params=[
                Param("Name", required=True, description="Name for the Peering connection"),
                Param("Vpc1", required=True, description="ID of the first VPC"),
                Param("Vpc2", required=True, description="ID of the second VPC"),
            ],
            handler=create_peering,
        ),
        ToolDefinition(
            name="digitalocean-vpc-peering-delete",
            description="Delete a VPC Peering connection",
            params=[
                Param("ID", required=True, description="ID of the VPC Peering connection to delete")
            ],
            handler=delete_peering,
        ),
    ]

def cdn_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def get_cdn(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("cdn", "endpoints", args["ID"]), key="endpoint")

    async def list_cdns(args: Dict[str, Any]) -> Any:
        return await client.get("/cdn/endpoints", options=list_options(args), key="endpoints")

    async def create_cdn(args: Dict[str, Any]) -> Any:
        body = {"origin": args["Origin"], "ttl": args["TTL"]}
        if args["CustomDomain"]:
            body["custom_domain"] = args["CustomDomain"]
        return await client.post("/cdn/endpoints", json=body, key="endpoint")

    async def delete_cdn(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("cdn", "endpoints", args["ID"]))
        return message("CDN deleted successfully")

    async def flush_cache(args: Dict[str, Any]) -> Any:
        await client.delete(
            api_path("cdn", "endpoints", args["ID"], "cache"), json={"files": args["Files"]}
        )
        return message("CDN cache flushed successfully")

    return [
        ToolDefinition(
            name="digitalocean-cdn-get",
            description="Get CDN information by ID",
            params=[
                Param(
                    "ID",
                    required=True,
                    description="ID of the CDN",
                    required_message="CDN ID is required",
                )
            ],
            handler=get_cdn,
        ),
        ToolDefinition(
            name="digitalocean-cdn-list",
            description="List CDNs with pagination",
            params=_page_params(),
            handler=list_cdns,
        ),
        ToolDefinition(
            name="digitalocean-cdn-create",
            description="Create a new CDN",
            params=[
                Param("Origin", required=True, description="Origin URL for the CDN"),
                Param(
                    "TTL",
                    Kind.INTEGER,
                    required=True,
                    description="Time-to-live for the CDN cache",
                ),
                Param("CustomDomain", description="Custom domain for the CDN"),
            ],
            handler=create_cdn,
        ),
        ToolDefinition(
            name="digitalocean-cdn-delete",
            description="Delete a CDN",
            params=[Param("ID", required=True, description="ID of the CDN to delete")],
            handler=delete_cdn,
        ),
        ToolDefinition(
            name="digitalocean-cdn-flush-cache",
            description="Flush the cache of a CDN",
            params=[
                Param("ID", required=True, description="ID of the CDN"),
                Param(
                    "Files",
                    Kind.ARRAY,
                    required=True,
                    items=Kind.STRING,
                    description="file names to flush from the cache",
                ),
            ],
            handler=flush_cache,
        ),
    ]


def partner_attachment_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """Partner Network Connect attachments."""

    def attachment_path(*rest: Any) -> str:
        return api_path("partner_network_connect", "attachments", *rest)

    async def get_attachment(args: Dict[str, Any]) -> Any:
        return await client.get(attachment_path(args["ID"]), key="partner_attachment")

    async def list_attachments(args: Dict[str, Any]) -> Any:
        return await client.get(
            attachment_path(), options=list_options(args), key="partner_attachments"
        )

    async def create_attachment(args: Dict[str, Any]) -> Any:
        body = {
            "name": args["Name"],
            "region": args["Region"],
            "connection_bandwidth_in_mbps": args["Bandwidth"],
        }
        return await client.post(attachment_path(), json=body, key="partner_attachment")

    async def update_attachment(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "vpc_ids": args["VPCIDs"]}
        return await client.patch(attachment_path(args["ID"]), json=body, key="partner_attachment")

    async def delete_attachment(args: Dict[str, Any]) -> Any:
        await client.delete(attachment_path(args["ID"]))
        return message("Partner attachment deleted successfully")

    async def get_service_key(args: Dict[str, Any]) -> Any:
        return await client.get(attachment_path(args["ID"], "service_key"), key="service_key")

    async def get_bgp_auth_key(args: Dict[str, Any]) -> Any:
        return await client.get(attachment_path(args["ID"], "bgp_auth_key"), key="bgp_auth_key")

    def attachment_id(description: str = "ID of the partner attachment") -> Param:
        return Param(
            "ID",
            required=True,
            description=description,
            required_message="Partner attachment ID is required",
        )

    return [
        ToolDefinition(
            name="digitalocean-partner-attachment-get",
            description="Get partner attachment information by ID",
            params=[attachment_id()],
            handler=get_attachment,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-list",
            description="List partner attachments with pagination",
            params=_page_params(),
            handler=list_attachments,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-create",
            description="Create a new partner attachment",
            params=[
                Param("Name", required=True, description="Name of the partner attachment"),
                Param("Region", required=True, description="Region for the partner attachment"),
                Param("Bandwidth", Kind.INTEGER, required=True, description="Bandwidth in Mbps"),
            ],
            handler=create_attachment,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-delete",
            description="Delete a partner attachment",
            params=[attachment_id("ID of the partner attachment to delete")],
            handler=delete_attachment,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-get-service-key",
            description="Get the service key of a partner attachment",
            params=[attachment_id()],
            handler=get_service_key,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-get-bgp-config",
            description="Get the BGP configuration of a partner attachment",
            params=[attachment_id()],
            handler=get_bgp_auth_key,
        ),
        ToolDefinition(
            name="digitalocean-partner-attachment-update",
            description="Update a partner attachment",
            params=[
                attachment_id("ID of the partner attachment to update"),
                Param("Name", required=True, description="New name for the partner attachment"),
                Param(
                    "VPCIDs",
                    Kind.ARRAY,
                    required=True,
                    items=Kind.STRING,
                    description="VPC IDs to associate with the partner attachment",
                ),
            ],
            handler=update_attachment,
        ),
    ]


def networking_resources(client: DigitalOceanClient) -> List[ResourceDefinition]:
    async def firewall(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("firewalls", args["id"]), key="firewall")

    async def domain(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("domains", args["name"]), key="domain")

    async def domain_record(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("domains", args["name"], "records", args["record_id"]), key="domain_record"
        )

    async def reserved_ipv4(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("reserved_ips", args["ip"]), key="reserved_ip")

    async def reserved_ipv6(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("reserved_ipv6", args["ip"]), key="reserved_ipv6")

    async def certificate(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("certificates", args["id"]), key="certificate")

    async def vpc(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("vpcs", args["id"]), key="vpc")

    async def cdn(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("cdn", "endpoints", args["id"]), key="endpoint")

    async def partner_attachment(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("partner_network_connect", "attachments", args["id"]),
            key="partner_attachment",
        )

    return [
        ResourceDefinition(
            uri="firewalls://{id}",
            name="Firewall",
            description="Returns firewall information",
            handler=firewall,
        ),
        ResourceDefinition(
            uri="domains://{name}/records/{record_id}",
            name="Domain Record",
            description="Returns domain record information",
            handler=domain_record,
            params=[
                Param("name", required=True),
                Param("record_id", Kind.INTEGER, required=True, from_text=True),
            ],
        ),
        ResourceDefinition(
            uri="domains://{name}",
            name="Domain",
            description="Returns domain information",
            handler=domain,
        ),
        ResourceDefinition(
            uri="reserved_ipv4://{ip}",
            name="Reserved IPv4",
            description="Returns reserved IPv4 information",
            handler=reserved_ipv4,
        ),
        ResourceDefinition(
            uri="reserved_ipv6://{ip}",
            name="Reserved IPv6",
            description="Returns reserved IPv6 information",
            handler=reserved_ipv6,
        ),
        ResourceDefinition(
            uri="certificates://{id}",
            name="Certificate",
            description="Returns certificate information",
            handler=certificate,
        ),
        ResourceDefinition(
            uri="vpcs://{id}",
            name="VPC",
            description="Returns VPC information",
            handler=vpc,
        ),
        ResourceDefinition(
            uri="cdn://{id}",
            name="CDN",
            description="Returns CDN information",
            handler=cdn,
        ),
        ResourceDefinition(
            uri="partner_attachment://{id}",
            name="Partner Attachment",
            description="Returns partner attachment information",
            handler=partner_attachment,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    tools = (
        firewall_tools(client)
        + domain_tools(client)
        + reserved_ip_tools(client)
        + certificate_tools(client)
        + vpc_tools(client)
        + cdn_tools(client)
        + partner_attachment_tools(client)
    )
    for tool in tools:
        registry.add_tool(tool)
    for resource in networking_resources(client):
        registry.add_resource(resource)
    logger.debug("Registered %d networking tools", len(tools))
