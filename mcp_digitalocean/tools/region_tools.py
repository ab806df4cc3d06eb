from __future__ import annotations

from typing import Any, Dict, List

from ..do_client import DigitalOceanClient, ListOptions
from . import ResourceDefinition, ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options

DEFAULT_REGIONS_PAGE = 1
DEFAULT_REGIONS_PAGE_SIZE = 50


def region_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_regions(args: Dict[str, Any]) -> Any:
        return await client.get("/regions", options=list_options(args), key="regions")

    return [
        ToolDefinition(
            name="digitalocean-region-list",
            description=(
                "List all available regions with features and droplet size availability. "
                "Supports pagination."
            ),
            params=[
                Param("Page", Kind.INTEGER, default=DEFAULT_REGIONS_PAGE, description="Page number"),
                Param(
                    "PerPage",
                    Kind.INTEGER,
                    default=DEFAULT_REGIONS_PAGE_SIZE,
                    description="Items per page",
                ),
            ],
            handler=list_regions,
        ),
    ]


def region_resources(client: DigitalOceanClient) -> List[ResourceDefinition]:
    async def all_regions(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/regions", options=ListOptions(page=1, per_page=200), key="regions"
        )

    return [
        ResourceDefinition(
            uri="regions://all",
            name="Regions",
            description="Returns all available regions with features and droplet size availability",
            handler=all_regions,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    for tool in region_tools(client):
        registry.add_tool(tool)
    for resource in region_resources(client):
        registry.add_resource(resource)
