"""
DigitalOcean MCP server package.

This package exposes MCP tools and resources for:
- Account, billing, invoices, actions and SSH keys
- Droplets, droplet actions, sizes and images
- Networking (firewalls, domains, reserved IPs, certificates, VPCs)
- Managed databases (clusters, users, pools, replicas, Kafka topics)
- Uptime checks and 1-click marketplace apps

Every tool goes through the same dispatch path in `mcp_digitalocean.tools`:
argument extraction against declared parameters, one backend call, and a
uniform result envelope.
"""

__version__ = "1.0.5"
