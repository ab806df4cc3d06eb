import pytest

from conftest import options_of
from mcp_digitalocean.do_client import ListOptions
from mcp_digitalocean.tools.results import ErrorKind


@pytest.mark.asyncio
async def test_firewall_create_builds_rules(fake_client, registry):
    await registry.call_tool(
        "digitalocean-firewall-create",
        {
            "Name": "web",
            "InboundProtocol": "tcp",
            "InboundPortRange": "443",
            "InboundSource": "0.0.0.0/0",
            "OutboundProtocol": "udp",
            "OutboundPortRange": "53",
            "OutboundDestination": "0.0.0.0/0",
            "DropletIDs": [1, 2],
        },
    )

    method, path, kwargs = fake_client.last_call()
    assert (method, path) == ("POST", "/firewalls")
    assert kwargs["json"] == {
        "name": "web",
        "inbound_rules": [
            {"protocol": "tcp", "ports": "443", "sources": {"addresses": ["0.0.0.0/0"]}}
        ],
        "outbound_rules": [
            {"protocol": "udp", "ports": "53", "destinations": {"addresses": ["0.0.0.0/0"]}}
        ],
        "droplet_ids": [1, 2],
        "tags": [],
    }


@pytest.mark.asyncio
async def test_firewall_get_message(fake_client, registry):
    result = await registry.call_tool("digitalocean-firewall-get", {"ID": ""})
    assert result.message == "Firewall ID is required"
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_firewall_list_page_size(fake_client, registry):
    await registry.call_tool("digitalocean-firewall-list", {})
    assert options_of(fake_client.last_call()) == ListOptions(page=1, per_page=20)


@pytest.mark.asyncio
async def test_firewall_droplets_and_tags(fake_client, registry):
    result = await registry.call_tool("digitalocean-firewall-add-droplets", {"ID": "fw-1", "DropletIDs": [7]})
    assert result.text == "Droplet(s) added to firewall successfully"
    assert fake_client.last_call() == ("POST", "/firewalls/fw-1/droplets", {"json": {"droplet_ids": [7]}})

    result = await registry.call_tool("digitalocean-firewall-remove-tags", {"ID": "fw-1", "Tags": ["web"]})
    assert result.text == "Tag(s) removed from firewall successfully"
    assert fake_client.last_call() == ("DELETE", "/firewalls/fw-1/tags", {"json": {"tags": ["web"]}})


@pytest.mark.asyncio
async def test_firewall_add_rules(fake_client, registry):
    result = await registry.call_tool(
        "digitalocean-firewall-add-rules",
        {
            "ID": "fw-1",
            "InboundRules": [{"Protocol": "tcp", "PortRange": "22", "Sources": ["10.0.0.0/8"]}],
        },
    )

    assert result.text == "Rule(s) added to firewall successfully"
    assert fake_client.last_call()[2]["json"] == {
        "inbound_rules": [{"protocol": "tcp", "ports": "22", "sources": {"addresses": ["10.0.0.0/8"]}}],
        "outbound_rules": [],
    }


@pytest.mark.asyncio
async def test_firewall_rules_need_at_least_one(fake_client, registry):
    result = await registry.call_tool("digitalocean-firewall-remove-rules", {"ID": "fw-1"})
    assert result.kind == ErrorKind.CALLER_INPUT
    assert result.message == "At least one inbound or outbound rule must be provided"
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_firewall_rule_without_protocol(fake_client, registry):
    result = await registry.call_tool(
        "digitalocean-firewall-add-rules", {"ID": "fw-1", "OutboundRules": [{"PortRange": "all"}]}
    )
    assert result.kind == ErrorKind.CALLER_INPUT
    assert result.message.startswith("Invalid OutboundRules")
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_domain_records(fake_client, registry):
    await registry.call_tool(
        "domain-record-edit",
        {"Domain": "example.com", "RecordID": 3, "Type": "A", "Name": "www", "Data": "1.2.3.4"},
    )
    assert fake_client.last_call() == (
        "PUT",
        "/domains/example.com/records/3",
        {"json": {"type": "A", "name": "www", "data": "1.2.3.4"}, "key": "domain_record"},
    )

    result = await registry.call_tool("domain-record-get", {"Domain": "example.com"})
    assert result.message == "RecordID is required"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "ip_type,path",
    [("ipv4", "/reserved_ips/1.2.3.4"), ("ipv6", "/reserved_ipv6/1.2.3.4")],
)
async def test_reserved_ip_release(fake_client, registry, ip_type, path):
    result = await registry.call_tool("digitalocean-reserved-ip-release", {"IP": "1.2.3.4", "Type": ip_type})
    assert result.text == "reserved IP released successfully"
    assert fake_client.last_call()[:2] == ("DELETE", path)


@pytest.mark.asyncio
async def test_reserved_ip_assign(fake_client, registry):
    await registry.call_tool(
        "digitalocean-reserved-ip-assign", {"IP": "1.2.3.4", "DropletID": 9, "Type": "ipv4"}
    )
    assert fake_client.last_call() == (
        "POST",
        "/reserved_ips/1.2.3.4/actions",
        {"json": {"type": "assign", "droplet_id": 9}, "key": "action"},
    )


@pytest.mark.asyncio
async def test_reserved_ip_invalid_type(fake_client, registry):
    result = await registry.call_tool("digitalocean-reserved-ip-reserve", {"Region": "nyc3", "Type": "ipv5"})
    assert result.kind == ErrorKind.CALLER_INPUT
    assert result.message == "invalid IP type. Use 'ipv4' or 'ipv6'"
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_lets_encrypt_certificate(fake_client, registry):
    await registry.call_tool(
        "digitalocean-lets-encrypt-certificate-create",
        {"Name": "le", "DnsNames": ["example.com", "www.example.com"]},
    )
    assert fake_client.last_call()[2]["json"] == {
        "name": "le",
        "type": "lets_encrypt",
        "dns_names": ["example.com", "www.example.com"],
    }


@pytest.mark.asyncio
async def test_vpc_peering(fake_client, registry):
    await registry.call_tool("digitalocean-vpc-peering-create", {"Name": "p", "Vpc1": "a", "Vpc2": "b"})
    assert fake_client.last_call()[2]["json"] == {"name": "p", "vpc_ids": ["a", "b"]}

    result = await registry.call_tool("digitalocean-vpc-peering-delete", {"ID": "p-1"})
    assert result.text == "VPC peering connection deleted"


@pytest.mark.asyncio
async def test_domain_resources(fake_client, registry):
    await registry.read_resource("domains://example.com/records/12")
    assert fake_client.last_call() == ("GET", "/domains/example.com/records/12", {"key": "domain_record"})

    await registry.read_resource("domains://example.com")
    assert fake_client.last_call() == ("GET", "/domains/example.com", {"key": "domain"})


@pytest.mark.asyncio
async def test_ids_stay_inside_their_path_segment(fake_client, registry):
    await registry.call_tool("digitalocean-firewall-get", {"ID": "fw-1/droplets?tag=x"})
    assert fake_client.last_call()[1] == "/firewalls/fw-1%2Fdroplets%3Ftag%3Dx"

    await registry.read_resource("domains://example.com/records/12")
    assert fake_client.last_call()[1] == "/domains/example.com/records/12"


@pytest.mark.asyncio
async def test_cdn_create_and_flush(fake_client, registry):
    await registry.call_tool(
        "digitalocean-cdn-create", {"Origin": "static.nyc3.digitaloceanspaces.com", "TTL": 3600}
    )
    assert fake_client.last_call() == (
        "POST",
        "/cdn/endpoints",
        {"json": {"origin": "static.nyc3.digitaloceanspaces.com", "ttl": 3600}, "key": "endpoint"},
    )

    result = await registry.call_tool(
        "digitalocean-cdn-flush-cache", {"ID": "cdn-1", "Files": ["assets/*", "index.html"]}
    )
    assert result.text == "CDN cache flushed successfully"
    assert fake_client.last_call() == (
        "DELETE",
        "/cdn/endpoints/cdn-1/cache",
        {"json": {"files": ["assets/*", "index.html"]}},
    )


@pytest.mark.asyncio
async def test_cdn_lookup(fake_client, registry):
    result = await registry.call_tool("digitalocean-cdn-get", {})
    assert result.message == "CDN ID is required"

    await registry.call_tool("digitalocean-cdn-list", {})
    assert options_of(fake_client.last_call()) == ListOptions(page=1, per_page=20)

    await registry.read_resource("cdn://cdn-1")
    assert fake_client.last_call() == ("GET", "/cdn/endpoints/cdn-1", {"key": "endpoint"})


@pytest.mark.asyncio
async def test_partner_attachment_create_and_update(fake_client, registry):
    await registry.call_tool(
        "digitalocean-partner-attachment-create",
        {"Name": "to-megaport", "Region": "nyc", "Bandwidth": 1000},
    )
    assert fake_client.last_call() == (
        "POST",
        "/partner_network_connect/attachments",
        {
            "json": {"name": "to-megaport", "region": "nyc", "connection_bandwidth_in_mbps": 1000},
            "key": "partner_attachment",
        },
    )

    await registry.call_tool(
        "digitalocean-partner-attachment-update",
        {"ID": "pa-1", "Name": "renamed", "VPCIDs": ["vpc-1", "vpc-2"]},
    )
    assert fake_client.last_call() == (
        "PATCH",
        "/partner_network_connect/attachments/pa-1",
        {"json": {"name": "renamed", "vpc_ids": ["vpc-1", "vpc-2"]}, "key": "partner_attachment"},
    )


@pytest.mark.asyncio
async def test_partner_attachment_keys(fake_client, registry):
    fake_client.respond(
        "GET", "/partner_network_connect/attachments/pa-1/bgp_auth_key", {"value": "secret"}
    )
    result = await registry.call_tool("digitalocean-partner-attachment-get-bgp-config", {"ID": "pa-1"})
    assert result.payload() == {"value": "secret"}
    assert fake_client.last_call()[2] == {"key": "bgp_auth_key"}

    result = await registry.call_tool("digitalocean-partner-attachment-get-service-key", {})
    assert result.message == "Partner attachment ID is required"

    result = await registry.call_tool("digitalocean-partner-attachment-delete", {"ID": "pa-1"})
    assert result.text == "Partner attachment deleted successfully"
