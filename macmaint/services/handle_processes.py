"""Process Handlers — process_list, kill_process.

Invariants:
    - kill_process without pid and name returns failure without issuing any command;
      pid 0 counts as absent
    - Negative or fractional pids are refused before any command runs
    - kill_process by name signals only the first pgrep match
    - kill_process reports failure in-band as {"success": false, "error"}
"""

import logging

from macmaint.core.domain_types import ProcessSortKey
from macmaint.core.parse_processes import (
    PS_SORT_FLAGS, first_pid, parse_ps_aux, sort_by_name,
)
from macmaint.services.handler_helpers import (
    HANDLER_FAULTS, CommandRunner, tool_boundary,
)

logger = logging.getLogger(__name__)


class ProcessHandlers:

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @tool_boundary()
    async def process_list(self, args: dict) -> dict:
        sort_key = ProcessSortKey(args["sortBy"])
        output = await self.runner.run("ps", "aux", *PS_SORT_FLAGS[sort_key])
        limit = max(int(args["limit"]), 0)
        if sort_key is ProcessSortKey.NAME:
            header, processes = parse_ps_aux(output, name_filter=args.get("filter"))
            processes = sort_by_name(processes)[:limit]
        else:
            header, processes = parse_ps_aux(
                output, limit=limit, name_filter=args.get("filter"),
            )
        return {"sortedBy": sort_key.value, "header": header, "processes": processes}

    async def kill_process(self, args: dict) -> dict:
        pid = args.get("pid")
        name = args.get("name")
        force = args["force"]
        if not pid:
            pid = None
            if not name:
                return {"success": False, "error": "Must provide either pid or name"}
        elif pid < 0 or pid != int(pid):
            return {"success": False, "error": f"Invalid pid: {pid}"}

        signal_flag, signal_name = ("-9", "SIGKILL") if force else ("-15", "SIGTERM")
        try:
            if pid is not None:
                target = int(pid)
                killed = {"pid": target}
            else:
                try:
                    found = first_pid(await self.runner.run("pgrep", "-f", name))
                except HANDLER_FAULTS:
                    # pgrep exits 1 when nothing matches
                    found = None
                if found is None:
                    return {"success": False, "error": f"No process found matching: {name}"}
                target = found
                killed = {"pid": target, "name": name}

            await self.runner.run("kill", signal_flag, str(target))
        except HANDLER_FAULTS as e:
            logger.warning(
                f"kill_process failed: {e}", extra={"tool_name": "kill_process"},
            )
            return {"success": False, "error": str(e)}

        logger.info(
            f"Sent {signal_name} to pid {target}", extra={"tool_name": "kill_process"},
        )
        return {"success": True, "killed": killed, "signal": signal_name}
