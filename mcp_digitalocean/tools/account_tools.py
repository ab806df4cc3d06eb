from __future__ import annotations

from typing import Any, Dict, List

from ..do_client import DigitalOceanClient, ListOptions, api_path
from . import ResourceDefinition, ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options
from .results import message

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 30


def _page_params() -> List[Param]:
    return [
        Param("Page", Kind.INTEGER, default=DEFAULT_PAGE, description="Page number"),
        Param("PerPage", Kind.INTEGER, default=DEFAULT_PAGE_SIZE, description="Items per page"),
    ]


def account_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """
    Factory to produce account, billing, action and SSH key handlers bound to
    one API client.
    """

    async def get_account_information(args: Dict[str, Any]) -> Any:
        return await client.get("/account", key="account")

    async def get_balance(args: Dict[str, Any]) -> Any:
        return await client.get("/customers/my/balance")

    async def list_billing_history(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/customers/my/billing_history",
            options=list_options(args),
            key="billing_history",
        )

    async def list_invoices(args: Dict[str, Any]) -> Any:
        return await client.get("/customers/my/invoices", options=list_options(args))

    async def get_action(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("actions", args["ID"]), key="action")

    async def list_actions(args: Dict[str, Any]) -> Any:
        return await client.get("/actions", options=list_options(args), key="actions")

    async def create_key(args: Dict[str, Any]) -> Any:
        body = {"name": args["Name"], "public_key": args["PublicKey"]}
        return await client.post("/account/keys", json=body, key="ssh_key")

    async def get_key(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("account", "keys", args["ID"]), key="ssh_key")

    async def list_keys(args: Dict[str, Any]) -> Any:
        return await client.get("/account/keys", options=list_options(args), key="ssh_keys")

    async def delete_key(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("account", "keys", args["ID"]))
        return message("SSH key deleted successfully")

    return [
        ToolDefinition(
            name="account-get-information",
            description="Retrieves account information for the current user",
            handler=get_account_information,
        ),
        ToolDefinition(
            name="balance-get",
            description="Get balance information for the user account",
            handler=get_balance,
        ),
        ToolDefinition(
            name="billing-history-list",
            description="List billing history with pagination",
            params=_page_params(),
            handler=list_billing_history,
        ),
        ToolDefinition(
            name="invoice-list",
            description="List invoices with pagination",
            params=_page_params(),
            handler=list_invoices,
        ),
        ToolDefinition(
            name="action-get",
            description="Get a specific action by ID",
            params=[
                Param(
                    "ID",
                    Kind.INTEGER,
                    required=True,
                    description="Action ID",
                    required_message="Action ID is required",
                ),
            ],
            handler=get_action,
        ),
        ToolDefinition(
            name="action-list",
            description="List actions with pagination",
            params=_page_params(),
            handler=list_actions,
        ),
        ToolDefinition(
            name="key-create",
            description="Create a new SSH key",
            params=[
                Param("Name", required=True, description="Name of the SSH key"),
                Param("PublicKey", required=True, description="Public key content"),
            ],
            handler=create_key,
        ),
        ToolDefinition(
            name="key-delete",
            description="Delete an SSH key",
            params=[
                Param("ID", Kind.INTEGER, required=True, description="ID of the SSH key to delete"),
            ],
            handler=delete_key,
        ),
        ToolDefinition(
            name="key-get",
            description="Get an SSH key by ID",
            params=[
                Param(
                    "ID",
                    Kind.INTEGER,
                    required=True,
                    description="ID of the SSH key",
                    required_message="Key ID is required",
                ),
            ],
            handler=get_key,
        ),
        ToolDefinition(
            name="key-list",
            description="List SSH keys with pagination",
            params=_page_params(),
            handler=list_keys,
        ),
    ]


def account_resources(client: DigitalOceanClient) -> List[ResourceDefinition]:
    async def current_account(args: Dict[str, Any]) -> Any:
        return await client.get("/account", key="account")

    async def current_balance(args: Dict[str, Any]) -> Any:
        return await client.get("/customers/my/balance")

    async def action(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("actions", args["id"]), key="action")

    async def key(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("account", "keys", args["id"]), key="ssh_key")

    async def last_billing_entries(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/customers/my/billing_history",
            options=ListOptions(page=1, per_page=args["last"]),
            key="billing_history",
        )

    async def last_invoices(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/customers/my/invoices",
            options=ListOptions(page=1, per_page=args["last"]),
        )

    numeric_id = [Param("id", Kind.INTEGER, required=True, from_text=True)]
    last = [Param("last", Kind.INTEGER, required=True, from_text=True)]

    return [
        ResourceDefinition(
            uri="account://current",
            name="Account",
            description="Returns account information for the current user",
            handler=current_account,
        ),
        ResourceDefinition(
            uri="balance://current",
            name="Balance",
            description="Returns the balance of the current account",
            handler=current_balance,
        ),
        ResourceDefinition(
            uri="actions://{id}",
            name="Action",
            description="Returns action information",
            handler=action,
            params=numeric_id,
        ),
        ResourceDefinition(
            uri="keys://{id}",
            name="SSH Key",
            description="Returns SSH key information",
            handler=key,
            params=numeric_id,
        ),
        ResourceDefinition(
            uri="billing://{last}",
            name="Billing History",
            description="Returns the most recent billing history entries",
            handler=last_billing_entries,
            params=last,
        ),
        ResourceDefinition(
            uri="invoice://{last}",
            name="Invoices",
            description="Returns the most recent invoices",
            handler=last_invoices,
            params=last,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    for tool in account_tools(client):
        registry.add_tool(tool)
    for resource in account_resources(client):
        registry.add_resource(resource)
