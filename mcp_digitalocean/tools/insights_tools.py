from __future__ import annotations

from typing import Any, Dict, List

from ..do_client import DigitalOceanClient, api_path
from ..models import AlertNotifications, SlackDetails
from . import ToolDefinition, ToolRegistry
from .params import Kind, Param, list_options
from .results import message

DEFAULT_CHECKS_PAGE_SIZE = 20
DEFAULT_ALERTS_PAGE_SIZE = 20
DEFAULT_POLICIES_PAGE_SIZE = 20

ALERT_PERIODS = ("2m", "3m", "5m", "10m", "15m", "30m", "1h")


def _page_params(per_page: int) -> List[Param]:
    return [
        Param("Page", Kind.INTEGER, default=1, description="Page number"),
        Param("PerPage", Kind.INTEGER, default=per_page, description="Items per page"),
    ]


def uptime_check_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """
    Factory for uptime check handlers.

    Create and update send the whole check: DigitalOcean replaces the stored
    check with the request body.
    """

    def check_body(args: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": args["Name"],
            "type": args["Type"],
            "target": args["Target"],
            "regions": args["Regions"],
            "enabled": args["Enabled"],
        }

    async def get_check(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("uptime", "checks", args["ID"]), key="check")

    async def get_check_state(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("uptime", "checks", args["ID"], "state"), key="state")

    async def list_checks(args: Dict[str, Any]) -> Any:
        return await client.get("/uptime/checks", options=list_options(args), key="checks")

    async def create_check(args: Dict[str, Any]) -> Any:
        return await client.post("/uptime/checks", json=check_body(args), key="check")

    async def update_check(args: Dict[str, Any]) -> Any:
        return await client.put(
            api_path("uptime", "checks", args["ID"]), json=check_body(args), key="check"
        )

    async def delete_check(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("uptime", "checks", args["ID"]))
        return message("uptimeCheckID deleted successfully")

    def check_id(description: str = "ID of the UptimeCheck") -> Param:
        return Param(
            "ID",
            required=True,
            description=description,
            required_message="UptimeCheck ID is required",
        )

    check_fields = [
        Param("Name", required=True, description="Name of the UptimeCheck"),
        Param("Type", required=True, description="Type of the UptimeCheck. value : HTTPS, HTTP or PING"),
        Param("Target", required=True, description="Endpoint to check for the UptimeCheck"),
        Param(
            "Regions",
            Kind.ARRAY,
            description=(
                "Regions where you'd like to perform these checks. "
                'values : "us_east", "us_west", "eu_west", "se_asia"'
            ),
        ),
        Param(
            "Enabled",
            Kind.BOOLEAN,
            required=True,
            description="A boolean value indicating whether the check is enabled or disabled.",
        ),
    ]

    return [
        ToolDefinition(
            name="uptimecheck-get",
            description="Get UptimeCheck information by ID",
            params=[check_id()],
            handler=get_check,
        ),
        ToolDefinition(
            name="uptimecheck-get-state",
            description="Get the state of an UptimeCheck by ID",
            params=[check_id()],
            handler=get_check_state,
        ),
        ToolDefinition(
            name="uptimecheck-list",
            description="List UptimeChecks with pagination",
            params=_page_params(DEFAULT_CHECKS_PAGE_SIZE),
            handler=list_checks,
        ),
        ToolDefinition(
            name="uptimecheck-create",
            description="Create a new UptimeCheck",
            params=check_fields,
            handler=create_check,
        ),
        ToolDefinition(
            name="uptimecheck-update",
            description="Update a UptimeCheck",
            params=[check_id(), *check_fields],
            handler=update_check,
        ),
        ToolDefinition(
            name="uptimecheck-delete",
            description="Delete a uptimeCheck",
            params=[check_id("ID of the uptimeCheck to delete")],
            handler=delete_check,
        ),
    ]


def uptime_alert_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    def alert_body(args: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": args["Name"],
            "type": args["Type"],
            "threshold": args["Threshold"],
            "comparison": args["Comparison"],
            "period": args["Period"],
            "notifications": {
                "email": args["Emails"],
                "slack": [d.model_dump() for d in args["SlackDetails"]],
            },
        }

    def alerts_path(args: Dict[str, Any], *rest: Any) -> str:
        return api_path("uptime", "checks", args["CheckID"], "alerts", *rest)

    async def get_alert(args: Dict[str, Any]) -> Any:
        return await client.get(alerts_path(args, args["AlertID"]), key="alert")

    async def list_alerts(args: Dict[str, Any]) -> Any:
        return await client.get(alerts_path(args), options=list_options(args), key="alerts")

    async def create_alert(args: Dict[str, Any]) -> Any:
        return await client.post(alerts_path(args), json=alert_body(args), key="alert")

    async def update_alert(args: Dict[str, Any]) -> Any:
        return await client.put(
            alerts_path(args, args["AlertID"]), json=alert_body(args), key="alert"
        )

    async def delete_alert(args: Dict[str, Any]) -> Any:
        await client.delete(alerts_path(args, args["AlertID"]))
        return message("uptimeCheck alert deleted successfully")

    check_id = Param(
        "CheckID",
        required=True,
        description="A unique identifier for a check",
        required_message="Uptime CheckID is required",
    )
    alert_id = Param(
        "AlertID",
        required=True,
        description="A unique identifier for an alert",
        required_message="UptimeCheck AlertID is required",
    )
    alert_fields = [
        Param("Name", required=True, description="Name of the UptimeCheck Alert"),
        Param(
            "Type",
            required=True,
            description="latency, down, down_global or ssl_expiry. type of the UptimeCheck Alert",
        ),
        Param(
            "Threshold",
            Kind.INTEGER,
            description=(
                "The threshold at which the alert will enter a trigger state. "
                "The specific threshold is dependent on the alert type"
            ),
        ),
        Param(
            "Comparison",
            description=(
                "The comparison operator used against the alert's threshold. "
                "values : greater_than or less_than"
            ),
        ),
        Param(
            "Period",
            required=True,
            description=(
                "Period of time the threshold must be exceeded to trigger the alert: "
                + ", ".join(ALERT_PERIODS)
            ),
        ),
        Param("Emails", Kind.ARRAY, required=True, description="Email addresses to notify"),
        Param(
            "SlackDetails",
            Kind.ARRAY,
            items=Kind.OBJECT,
            schema=List[SlackDetails],
            description="Slack channels to notify, each with url and channel",
        ),
    ]

    return [
        ToolDefinition(
            name="digitalocean-uptimecheck-alert-get",
            description="Get UptimeCheck Alert information by CheckID and AlertID",
            params=[check_id, alert_id],
            handler=get_alert,
        ),
        ToolDefinition(
            name="digitalocean-uptimecheck-alert-list",
            description="List UptimeChecks Alerts with pagination",
            params=[check_id, *_page_params(DEFAULT_ALERTS_PAGE_SIZE)],
            handler=list_alerts,
        ),
        ToolDefinition(
            name="digitalocean-uptimecheck-alert-create",
            description="Create a new UptimeCheck Alert",
            params=[check_id, *alert_fields],
            handler=create_alert,
        ),
        ToolDefinition(
            name="digitalocean-uptimecheck-alert-update",
            description="Update a UptimeCheck Alert",
            params=[check_id, alert_id, *alert_fields],
            handler=update_alert,
        ),
        ToolDefinition(
            name="digitalocean-uptimecheck-alert-delete",
            description="Delete a UptimeCheck Alert",
            params=[check_id, alert_id],
            handler=delete_alert,
        ),
    ]


def alert_policy_tools(client: DigitalOceanClient) -> List[ToolDefinition]:
    """Droplet and resource metric alert policies (the monitoring API)."""

    def policy_body(args: Dict[str, Any]) -> Dict[str, Any]:
        alerts = args["Alerts"] or AlertNotifications()
        return {
            "type": args["Type"],
            "description": args["Description"],
            "compare": args["Compare"],
            "value": args["Value"],
            "window": args["Window"],
            "entities": args["Entities"] or [],
            "tags": args["Tags"] or [],
            "alerts": alerts.to_api(),
            "enabled": args["Enabled"],
        }

    async def get_policy(args: Dict[str, Any]) -> Any:
        return await client.get(api_path("monitoring", "alerts", args["UUID"]), key="policy")

    async def list_policies(args: Dict[str, Any]) -> Any:
        return await client.get(
            "/monitoring/alerts", options=list_options(args), key="policies"
        )

    async def create_policy(args: Dict[str, Any]) -> Any:
        return await client.post("/monitoring/alerts", json=policy_body(args), key="policy")

    async def update_policy(args: Dict[str, Any]) -> Any:
        return await client.put(
            api_path("monitoring", "alerts", args["UUID"]), json=policy_body(args), key="policy"
        )

    async def delete_policy(args: Dict[str, Any]) -> Any:
        await client.delete(api_path("monitoring", "alerts", args["UUID"]))
        return message("Alert Policy deleted successfully")

    def policy_uuid(description: str) -> Param:
        return Param(
            "UUID",
            required=True,
            description=description,
            required_message="Alert Policy UUID is required",
        )

    policy_fields = [
        Param(
            "Type",
            required=True,
            description=(
                "Type of the Alert Policy, e.g. v1/insights/droplet/cpu, "
                "v1/insights/droplet/memory_utilization_percent, v1/insights/droplet/load_1"
            ),
        ),
        Param("Description", required=True, description="Human-readable description of the alert policy"),
        Param("Compare", required=True, description="Comparison operator: 'GreaterThan' or 'LessThan'"),
        Param(
            "Value",
            Kind.NUMBER,
            required=True,
            description="Threshold value for the alert (e.g., 80 for 80% CPU)",
        ),
        Param("Window", required=True, description="Time window for the alert: '5m', '10m', '30m', '1h'"),
        Param("Entities", Kind.ARRAY, description="Resource IDs to monitor (e.g., Droplet IDs)"),
        Param("Tags", Kind.ARRAY, description="Monitor resources carrying these tags"),
        Param(
            "Alerts",
            Kind.OBJECT,
            schema=AlertNotifications,
            description="Notification settings: Email (addresses) and Slack (URL, Channel pairs)",
        ),
        Param(
            "Enabled",
            Kind.BOOLEAN,
            default=True,
            description="Whether the alert policy is enabled (true) or disabled (false)",
        ),
    ]

    return [
        ToolDefinition(
            name="digitalocean-alert-policy-get",
            description="Get Alert Policy information by UUID",
            params=[policy_uuid("UUID of the Alert Policy to retrieve")],
            handler=get_policy,
        ),
        ToolDefinition(
            name="digitalocean-alert-policy-list",
            description="List Alert Policies with pagination",
            params=_page_params(DEFAULT_POLICIES_PAGE_SIZE),
            handler=list_policies,
        ),
        ToolDefinition(
            name="digitalocean-alert-policy-create",
            description="Create a new Alert Policy",
            params=policy_fields,
            handler=create_policy,
        ),
        ToolDefinition(
            name="digitalocean-alert-policy-update",
            description="Update an existing Alert Policy",
            params=[policy_uuid("UUID of the Alert Policy to update"), *policy_fields],
            handler=update_policy,
        ),
        ToolDefinition(
            name="digitalocean-alert-policy-delete",
            description="Delete an Alert Policy",
            params=[policy_uuid("UUID of the Alert Policy to delete")],
            handler=delete_policy,
        ),
    ]


def register_tools(registry: ToolRegistry, client: DigitalOceanClient) -> None:
    groups = (uptime_check_tools, uptime_alert_tools, alert_policy_tools)
    for group in groups:
        for tool in group(client):
            registry.add_tool(tool)
