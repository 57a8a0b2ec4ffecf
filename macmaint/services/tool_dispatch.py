"""Tool Dispatch — explicit routing from tool_name to handler method.

Invariants:
    - Every tool->handler mapping is visible: no getattr magic, no auto-discovery
    - Unknown tool raises UnknownToolError; invalid argument raises
      InvalidArgumentError, and in both cases no handler runs
    - Defaults are filled before validation; the handler result is returned unchanged
    - Every call is logged with its tool name

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Handlers split by concern: at most ~4 methods per class
    - Handlers share one CommandRunner, so timeouts are configured once
"""

import logging
from typing import Any, Mapping

from macmaint.config import Settings, get_settings
from macmaint.core.errors import MacMaintError, UnboundToolError, UnknownToolError
from macmaint.core.parameter_schema import prepare_arguments
from macmaint.infrastructure.command_executor import CommandExecutor
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.services.handle_cleanup import CleanupHandlers
from macmaint.services.handle_disk import DiskHandlers
from macmaint.services.handle_performance import PerformanceHandlers
from macmaint.services.handle_processes import ProcessHandlers
from macmaint.services.handle_system import SystemHandlers
from macmaint.services.handle_workflow import WorkflowHandlers
from macmaint.services.handler_helpers import CommandRunner
from macmaint.services.tools_registry import lookup

logger = logging.getLogger(__name__)


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self,
        executor: CommandExecutor,
        env: EnvironmentContext,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        runner = CommandRunner(
            executor,
            timeout=settings.command_timeout_seconds,
            cleanup_timeout=settings.cleanup_timeout_seconds,
        )
        disk = DiskHandlers(runner, env)
        cleanup = CleanupHandlers(runner, env)
        workflow = WorkflowHandlers(runner, env)
        performance = PerformanceHandlers(runner, settings.memory_page_size)
        system = SystemHandlers(runner, env, settings.external_ip_url)
        processes = ProcessHandlers(runner)

        # Every mapping explicit: adding a tool requires editing this dict
        self._handlers = {
            # Disk & cleanup (10 tools)
            "disk_usage": disk.disk_usage,
            "go_cache_status": disk.go_cache_status,
            "cleanup_caches": cleanup.cleanup_caches,
            "cleanup_docker": cleanup.cleanup_docker,
            "memory_status": performance.memory_status,
            "cleanup_recommendations": cleanup.cleanup_recommendations,
            "empty_trash": disk.empty_trash,
            "full_cleanup_workflow": workflow.full_cleanup_workflow,
            "analyze_library": disk.analyze_library,
            "developer_cleanup": cleanup.developer_cleanup,

            # Monitoring (8 tools)
            "cpu_usage": performance.cpu_usage,
            "thermal_status": performance.thermal_status,
            "battery_health": performance.battery_health,
            "system_info": system.system_info,
            "process_list": processes.process_list,
            "kill_process": processes.kill_process,
            "startup_items": system.startup_items,
            "network_status": system.network_status,
        }

    @property
    def handler_names(self) -> frozenset[str]:
        return frozenset(self._handlers)

    async def execute(
        self, tool_name: str, raw_arguments: Mapping[str, Any] | None = None,
    ) -> dict:
        """Look up, fill defaults, validate, run the bound handler."""
        try:
            descriptor = lookup(tool_name)
            if descriptor is None:
                raise UnknownToolError(tool_name)
            arguments = prepare_arguments(descriptor, raw_arguments)
            handler = self._handlers.get(tool_name)
            if handler is None:
                raise UnboundToolError(tool_name)
        except MacMaintError as e:
            e.context.tool_name = tool_name
            logger.warning(
                f"Tool call rejected: {e.message}",
                extra={"tool_name": tool_name, "error_code": e.code},
            )
            raise

        logger.info("tool_call", extra={"tool_name": tool_name})
        result = await handler(arguments)
        if isinstance(result, dict) and "error" in result:
            logger.warning(
                f"Tool '{tool_name}' returned an error: {result['error']}",
                extra={"tool_name": tool_name},
            )
        return result
