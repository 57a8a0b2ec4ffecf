"""System Handlers — system_info, startup_items, network_status.

Invariants:
    - Read-only
    - Missing launch agent directories yield empty lists, not errors
    - Wi-Fi and external IP degrade to placeholder strings
"""

import logging

from macmaint.core.parse_disk import head_lines
from macmaint.core.parse_network import (
    count_established, disabled_services, dns_servers, interface_lines,
    join_sw_vers, memsize_label, plist_listing, plist_names, wifi_lines,
)
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.services.handler_helpers import (
    HANDLER_FAULTS, CommandRunner, tool_boundary,
)

logger = logging.getLogger(__name__)

AIRPORT = (
    "/System/Library/PrivateFrameworks/Apple80211.framework/Versions/Current"
    "/Resources/airport"
)
SYSTEM_LAUNCH_AGENTS = "/Library/LaunchAgents"

_LOADED_AGENT_LINES = 30


class SystemHandlers:
    """Host identity, startup items and network state."""

    def __init__(
        self, runner: CommandRunner, env: EnvironmentContext,
        external_ip_url: str = "ifconfig.me",
    ):
        self.runner = runner
        self.env = env
        self.external_ip_url = external_ip_url

    @tool_boundary()
    async def system_info(self, args: dict) -> dict:
        try:
            chip = (
                await self.runner.run("sysctl", "-n", "machdep.cpu.brand_string")
            ).strip() or "Apple Silicon"
        except HANDLER_FAULTS:
            chip = "Apple Silicon"
        disk = await self.runner.root_filesystem()
        return {
            "macOS": join_sw_vers(await self.runner.run("sw_vers")),
            "model": (await self.runner.run("sysctl", "-n", "hw.model")).strip(),
            "chip": chip,
            "memoryGB": memsize_label(await self.runner.run("sysctl", "-n", "hw.memsize")),
            "uptime": (await self.runner.run("uptime")).strip(),
            "disk": {
                "total": disk["total"],
                "used": disk["used"],
                "available": disk["available"],
                "percentUsed": disk["percentUsed"],
            },
            "currentUser": self.env.user,
            "hostname": (await self.runner.run("hostname")).strip(),
        }

    @tool_boundary()
    async def startup_items(self, args: dict) -> dict:
        items: dict = {"loginItems": [], "launchAgents": [], "launchDaemons": []}

        user_dir = self.env.user_launch_agents
        try:
            listing = await self.runner.run("ls", "-la", user_dir)
            items["launchAgents"] = plist_listing(listing, user_dir)
        except HANDLER_FAULTS as e:
            logger.debug(f"No user launch agents: {e}")

        loaded = await self.runner.run("launchctl", "list")
        items["loadedAgents"] = "\n".join(head_lines(loaded, _LOADED_AGENT_LINES))

        try:
            system_listing = await self.runner.run("ls", SYSTEM_LAUNCH_AGENTS)
            system_agents = plist_names(system_listing, SYSTEM_LAUNCH_AGENTS)
        except HANDLER_FAULTS:
            system_agents = []
        if system_agents:
            items["systemAgents"] = system_agents

        if args["showDisabled"]:
            try:
                output = await self.runner.run(
                    "launchctl", "print-disabled", f"gui/{self.env.uid}",
                )
                items["disabledAgents"] = disabled_services(output)
            except HANDLER_FAULTS as e:
                items["disabledAgents"] = {"error": str(e)}
        return items

    @tool_boundary()
    async def network_status(self, args: dict) -> dict:
        status = {"interfaces": interface_lines(await self.runner.run("ifconfig"))}

        try:
            wifi = wifi_lines(await self.runner.run(AIRPORT, "-I"))
        except HANDLER_FAULTS:
            wifi = ""
        status["wifi"] = wifi or "Not connected to WiFi"

        try:
            external_ip = (await self.runner.run(
                "curl", "-s", "--max-time", "2", self.external_ip_url,
            )).strip()
        except HANDLER_FAULTS:
            external_ip = ""
        status["externalIp"] = external_ip or "Unable to determine"

        status["dnsServers"] = dns_servers(await self.runner.run("scutil", "--dns"))
        status["activeConnections"] = count_established(
            await self.runner.run("netstat", "-an"),
        )
        return status
