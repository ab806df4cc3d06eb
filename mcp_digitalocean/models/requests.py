from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FirewallRule(BaseModel):
    """
    One inbound or outbound cloud firewall rule as callers send it.

    Callers use `Sources` for inbound rules and `Destinations` for outbound
    rules; `to_inbound` / `to_outbound` render the API representation.
    """

    model_config = ConfigDict(populate_by_name=True)

    protocol: str = Field(alias="Protocol")
    port_range: str = Field(default="", alias="PortRange")
    sources: List[str] = Field(default_factory=list, alias="Sources")
    destinations: List[str] = Field(default_factory=list, alias="Destinations")

    def to_inbound(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol,
            "ports": self.port_range,
            "sources": {"addresses": self.sources},
        }

    def to_outbound(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol,
            "ports": self.port_range,
            "destinations": {"addresses": self.destinations},
        }


class DatabaseFirewallRule(BaseModel):
    """Trusted source of a managed database cluster."""

    model_config = ConfigDict(extra="allow")

    type: str
    value: str
    uuid: Optional[str] = None
    cluster_uuid: Optional[str] = None


class OnlineMigrationSource(BaseModel):
    """Connection details of the database an online migration copies from."""

    host: str
    port: int
    dbname: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SlackDetails(BaseModel):
    """
    Slack destination of an alert notification.

    Uptime alerts send `url`/`channel`; alert policies send `URL`/`Channel`.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(validation_alias=AliasChoices("url", "URL"))
    channel: str = Field(validation_alias=AliasChoices("channel", "Channel"))


class AlertNotifications(BaseModel):
    """Who an alert policy notifies, in the `Email`/`Slack` shape callers use."""

    model_config = ConfigDict(populate_by_name=True)

    email: List[str] = Field(default_factory=list, alias="Email")
    slack: List[SlackDetails] = Field(default_factory=list, alias="Slack")

    def to_api(self) -> Dict[str, Any]:
        return {"email": self.email, "slack": [s.model_dump() for s in self.slack]}
