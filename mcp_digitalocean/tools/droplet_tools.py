from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..do_client import DigitalOceanClient, ListOptions, api_path
from . import ResourceDefinition, ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options
from .results import message

DEFAULT_DROPLETS_PAGE_SIZE = 50
DEFAULT_SIZES_PAGE_SIZE = 50
DEFAULT_IMAGES_PAGE_SIZE = 50

_DROPLET_ID = Param("ID", Kind.INTEGER, required=True, description="Droplet ID")

# (tool suffix, action type, description, extra params, request body builder)
_BodyBuilder = Callable[[Dict[str, Any]], Dict[str, Any]]
_ACTIONS: Sequence[Tuple[str, str, str, Sequence[Param], Optional[_BodyBuilder]]] = (
    ("power-cycle", "power_cycle", "Power cycle a droplet", (), None),
    ("power-on", "power_on", "Power on a droplet", (), None),
    ("power-off", "power_off", "Power off a droplet", (), None),
    ("shutdown", "shutdown", "Shutdown a droplet", (), None),
    ("reboot", "reboot", "Reboot a droplet", (), None),
    (
        "restore",
        "restore",
        "Restore a droplet from a backup image",
        (Param("ImageID", Kind.INTEGER, required=True, description="ID of the backup image"),),
        lambda a: {"image": a["ImageID"]},
    ),
    (
        "resize",
        "resize",
        "Resize a droplet",
        (
            Param("Size", required=True, description="Slug of the new size (e.g., s-1vcpu-1gb)"),
            Param(
                "ResizeDisk",
                Kind.BOOLEAN,
                default=False,
                description="Whether to resize the disk",
            ),
        ),
        lambda a: {"size": a["Size"], "disk": a["ResizeDisk"]},
    ),
    (
        "rebuild",
        "rebuild",
        "Rebuild a droplet from an image",
        (Param("ImageID", Kind.INTEGER, required=True, description="ID of the image to rebuild from"),),
        lambda a: {"image": a["ImageID"]},
    ),
    (
        "rename",
        "rename",
        "Rename a droplet",
        (Param("Name", required=True, description="New name for the droplet"),),
        lambda a: {"name": a["Name"]},
    ),
    (
        "change-kernel",
        "change_kernel",
        "Change a droplet's kernel",
        (Param("KernelID", Kind.INTEGER, required=True, description="ID of the kernel to switch to"),),
        lambda a: {"kernel": a["KernelID"]},
    ),
    ("enable-ipv6", "enable_ipv6", "Enable IPv6 on a droplet", (), None),
    ("enable-backups", "enable_backups", "Enable backups on a droplet", (), None),
    ("disable-backups", "disable_backups", "Disable backups on a droplet", (), None),
    (
        "snapshot",
        "snapshot",
        "Take a snapshot of a droplet",
        (Param("Name", required=True, description="Name for the snapshot"),),
        lambda a: {"name": a["Name"]},
    ),
)


def droplet_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def create_droplet(args: Dict[str, Any]) -> Any:
        body = {
            "name": args["Name"],
            "size": args["Size"],
            "image": args["ImageID"],
            "region": args["Region"],
            "backups": args["Backup"],
            "monitoring": args["Monitoring"],
        }
        return await client.post("/droplets", json=body, key="droplet")

    async def delete_droplet(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("droplets", args["ID"]))
        return message("Droplet deleted successfully")

    async def get_droplet(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("droplets", args["ID"]), key="droplet")

    async def list_droplets(args: Dict[str, Any]) -> Any:
        return await client.get("/droplets", options=list_options(args), key="droplets")

    async def get_kernels(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("droplets", args["ID"], "kernels"),
            options=ListOptions(page=1, per_page=100),
            key="kernels",
        )

    async def get_neighbors(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("droplets", args["ID"], "neighbors"), key="droplets")

    async def enable_private_networking(args: Dict[str, Any]) -> Any:
        return await client.post(
            api_path("droplets", args["ID"], "actions"),
            json={"type": "enable_private_networking"},
            key="action",
        )

    async def get_droplet_action(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("droplets", args["DropletID"], "actions", args["ActionID"]), key="action"
        )

    return [
        ToolDefinition(
            name="digitalocean-create-droplet",
            description="Create a new droplet",
            params=[
                Param("Name", required=True, description="Name of the droplet"),
                Param("Size", required=True, description="Slug of the droplet size (e.g., s-1vcpu-1gb)"),
                Param("ImageID", Kind.INTEGER, required=True, description="ID of the image to use"),
                Param("Region", required=True, description="Slug of the region (e.g., nyc3)"),
                Param("Backup", Kind.BOOLEAN, default=False, description="Whether to enable backups"),
                Param(
                    "Monitoring",
                    Kind.BOOLEAN,
                    default=False,
                    description="Whether to enable monitoring",
                ),
            ],
            handler=create_droplet,
        ),
        ToolDefinition(
            name="digitalocean-delete-droplet",
            description="Delete a droplet",
            params=[_DROPLET_ID],
            handler=delete_droplet,
        ),
        ToolDefinition(
            name="digitalocean-get-droplet",
            description="Get a droplet by its ID",
            params=[_DROPLET_ID],
            handler=get_droplet,
        ),
        ToolDefinition(
            name="digitalocean-get-droplets",
            description="List droplets with pagination",
            params=[
                Param("Page", Kind.INTEGER, default=1, description="Page number"),
                Param(
                    "PerPage",
                    Kind.INTEGER,
                    default=DEFAULT_DROPLETS_PAGE_SIZE,
                    description="Items per page",
                ),
            ],
            handler=list_droplets,
        ),
        ToolDefinition(
            name="digitalocean-get-droplet-kernels",
            description="Get available kernels for a droplet",
            params=[_DROPLET_ID],
            handler=get_kernels,
        ),
        ToolDefinition(
            name="digitalocean-get-droplet-neighbors",
            description="Get the droplets running on the same physical hardware",
            params=[_DROPLET_ID],
            handler=get_neighbors,
        ),
        ToolDefinition(
            name="digitalocean-enable-private-net-droplet",
            description="Enable private networking on a droplet",
            params=[_DROPLET_ID],
            handler=enable_private_networking,
        ),
        ToolDefinition(
            name="digitalocean-get-droplet-action",
            description="Get a specific action performed on a droplet",
            params=[
                Param("DropletID", Kind.INTEGER, required=True, description="Droplet ID"),
                Param("ActionID", Kind.INTEGER, required=True, description="Action ID"),
            ],
            handler=get_droplet_action,
        ),
    ] + [_action_tool(client, *action) for action in _ACTIONS]


def _action_tool(
    client: DigitalOceanClient,
    suffix: str,
    action_type: str,
    description: str,
    extra: Sequence[Param],
    build_body: Optional[_BodyBuilder],
) -> ToolDefinition:
    async def handler(args: Dict[str, Any]) -> Any:
        body: Dict[str, Any] = {"type": action_type}
        if build_body is not None:
            body.update(build_body(args))
        return await client.post(
            api_path("droplets", args["ID"], "actions"), json=body, key="action"
        )

    return ToolDefinition(
        name=f"digitalocean-droplet-action-{suffix}",
        description=description,
        params=[_DROPLET_ID, *extra],
        handler=handler,
    )


def size_and_image_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    async def list_sizes(args: Dict[str, Any]) -> Any:
        return await client.get("/sizes", options=list_options(args), key="sizes")

    async def list_images(args: Dict[str, Any]) -> Any:
        params = {"type": args["Type"]} if args["Type"] else None
        return await client.get("/images", params=params, options=list_options(args), key="images")

    async def get_image(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("images", args["ID"]), key="image")

    return [
        ToolDefinition(
            name="digitalocean-size-list",
            description="List all available droplet sizes. Supports pagination.",
            params=[
                Param("Page", Kind.INTEGER, default=1, description="Page number"),
                Param("PerPage", Kind.INTEGER, default=DEFAULT_SIZES_PAGE_SIZE, description="Items per page"),
            ],
            handler=list_sizes,
        ),
        ToolDefinition(
            name="digitalocean-image-list",
            description="List available images. Supports pagination and filtering by type.",
            params=[
                Param("Type", description="Image type filter: distribution or application"),
                Param("Page", Kind.INTEGER, default=1, description="Page number"),
                Param("PerPage", Kind.INTEGER, default=DEFAULT_IMAGES_PAGE_SIZE, description="Items per page"),
            ],
            handler=list_images,
        ),
        ToolDefinition(
            name="digitalocean-image-get",
            description="Get a specific image by its numeric ID",
            params=[Param("ID", Kind.INTEGER, required=True, description="Image ID")],
            handler=get_image,
        ),
    ]


def droplet_resources(client: DigitalOceanClient) -> List[ResourceDefinition]:
    async def droplet(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("droplets", args["id"]), key="droplet")

    async def droplet_action(args: Dict[str, Any]) -> Any:
        return await client.get(
            api_path("droplets", args["id"], "actions", args["action_id"]), key="action"
        )

    async def sizes(args: Dict[str, Any]) -> Any:
        return await client.get("/sizes", options=ListOptions(page=1, per_page=200), key="sizes")

    async def distribution_images(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/images",
            params={"type": "distribution"},
            options=ListOptions(page=1, per_page=200),
            key="images",
        )

    async def image(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("images", args["id"]), key="image")

    return [
        ResourceDefinition(
            uri="droplets://{id}",
            name="Droplet",
            description="Returns droplet information",
            handler=droplet,
            params=[Param("id", Kind.INTEGER, required=True, from_text=True)],
        ),
        ResourceDefinition(
            uri="droplets://{id}/actions/{action_id}",
            name="Droplet Action",
            description="Returns information about a droplet action",
            handler=droplet_action,
            params=[
                Param("id", Kind.INTEGER, required=True, from_text=True),
                Param("action_id", Kind.INTEGER, required=True, from_text=True),
            ],
        ),
        ResourceDefinition(
            uri="sizes://all",
            name="Droplet Sizes",
            description="Returns all available droplet sizes",
            handler=sizes,
        ),
        ResourceDefinition(
            uri="images://distribution",
            name="Distribution Images",
            description="Returns all available distribution images",
            handler=distribution_images,
        ),
        ResourceDefinition(
            uri="images://{id}",
            name="Image",
            description="Returns image information",
            handler=image,
            params=[Param("id", Kind.INTEGER, required=True, from_text=True)],
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    for tool in droplet_tools(client) + size_and_image_tools(client):
        registry.add_tool(tool)
    for resource in droplet_resources(client):
        registry.add_resource(resource)
