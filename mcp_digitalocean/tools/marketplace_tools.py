from __future__ import annotations

from typing import Any, Dict, List

from ..do_client import DigitalOceanClient
from . import ToolDefinition, ToolRegistry
from .params import Kind, Param
from .results import caller_error

DEFAULT_ONE_CLICK_TYPE = "droplet"


def marketplace_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_one_click_apps(args: Dict[str, Any]) -> Any:
        apps = await client.get("/1-clicks", params={"type": args["type"]}, key="1_clicks")
        return {"apps": apps, "type": args["type"]}

    async def install_kubernetes_apps(args: Dict[str, Any]) -> Any:
        if not args["app_slugs"]:
            return caller_error("app_slugs cannot be empty")
        body = {"addon_slugs": args["app_slugs"], "cluster_uuid": args["cluster_uuid"]}
        return await client.post("/1-clicks/kubernetes", json=body)

    return [
        ToolDefinition(
            name="digitalocean-1-click-list",
            description="List available 1-click applications from the DigitalOcean marketplace",
            params=[
                Param(
                    "type",
                    default=DEFAULT_ONE_CLICK_TYPE,
                    description=(
                        "Type of 1-click apps to list (e.g., 'droplet', 'kubernetes'). "
                        "Defaults to 'droplet'"
                    ),
                ),
            ],
            handler=list_one_click_apps,
            error_context="Failed to list 1-click apps",
        ),
        ToolDefinition(
            name="digitalocean-1-click-install-kubernetes",
            description="Install 1-click applications on a Kubernetes cluster",
            params=[
                Param(
                    "cluster_uuid",
                    required=True,
                    description="UUID of the Kubernetes cluster to install apps on",
                    required_message="cluster_uuid parameter is required",
                ),
                Param(
                    "app_slugs",
                    Kind.ARRAY,
                    required=True,
                    items=Kind.STRING,
                    description="Array of app slugs to install",
                    required_message="app_slugs parameter is required",
                ),
            ],
            handler=install_kubernetes_apps,
            error_context="Failed to install Kubernetes apps",
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    for tool in marketplace_tools(client):
        registry.add_tool(tool)
