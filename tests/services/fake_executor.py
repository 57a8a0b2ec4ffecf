"""Fake Executor — scripted stand-in for SubprocessExecutor in handler tests.

Invariants:
    - Responses are matched by argv prefix; the longest matching prefix wins, and
      among equal prefixes the most recently scripted one
    - A series of responses is consumed in order; its last response repeats
    - Unscripted commands behave like a missing binary (exit 127)
    - Every call is recorded in order, including unscripted ones

Design Decisions:
    - Flat class, no inheritance from the real executor: the Protocol is the contract
    - Destructive commands recognized by token, so dry-run tests need no per-tool list
"""

from macmaint.infrastructure.command_executor import CommandResult

DESTRUCTIVE_TOKENS = frozenset({"rm", "clean", "purge", "prune", "--prune=all", "kill"})


class FakeExecutor:
    """Scripted executor recording every argv it is asked to run."""

    def __init__(self):
        self.calls: list[tuple[str, ...]] = []
        self._scripts: list[tuple[tuple[str, ...], list[dict]]] = []

    def script(
        self, *prefix: str, stdout: str = "", stderr: str = "",
        exit_code: int = 0, timed_out: bool = False,
    ) -> "FakeExecutor":
        self._scripts.append((prefix, [{
            "stdout": stdout, "stderr": stderr,
            "exit_code": exit_code, "timed_out": timed_out,
        }]))
        return self

    def script_series(self, *prefix: str, stdouts: list[str]) -> "FakeExecutor":
        self._scripts.append((prefix, [
            {"stdout": out, "stderr": "", "exit_code": 0, "timed_out": False}
            for out in stdouts
        ]))
        return self

    def fail(self, *prefix: str, stderr: str = "failed", exit_code: int = 1):
        return self.script(*prefix, stderr=stderr, exit_code=exit_code)

    async def execute(self, command, args=(), timeout=None) -> CommandResult:
        argv = (command, *args)
        self.calls.append(argv)
        best = None
        for prefix, responses in self._scripts:
            if argv[:len(prefix)] == prefix and (best is None or len(prefix) >= len(best[0])):
                best = (prefix, responses)
        if best is None:
            return CommandResult(argv, "", f"Command not found: {command}", 127)
        responses = best[1]
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        return CommandResult(argv, **response)

    def ran(self, *prefix: str) -> bool:
        return any(call[:len(prefix)] == prefix for call in self.calls)

    def destructive_calls(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if DESTRUCTIVE_TOKENS & set(call)]


# -- Captured outputs ---------------------------------------------------------

DF_ROOT = (
    "Filesystem     Size   Used  Avail Capacity iused ifree %iused  Mounted on\n"
    "/dev/disk3s1s1 460Gi  410Gi  30Gi    94%    403k  4.3G    0%   /\n"
)

DF_ROOT_AFTER = (
    "Filesystem     Size   Used  Avail Capacity iused ifree %iused  Mounted on\n"
    "/dev/disk3s1s1 460Gi  398Gi  42Gi    91%    403k  4.3G    0%   /\n"
)

DF_ROOT_RELAXED = (
    "Filesystem     Size   Used  Avail Capacity iused ifree %iused  Mounted on\n"
    "/dev/disk3s1s1 460Gi  200Gi  260Gi    44%    403k  4.3G    0%   /\n"
)

VM_STAT = (
    "Mach Virtual Memory Statistics: (page size of 16384 bytes)\n"
    "Pages free:                               65536.\n"
    "Pages active:                            262144.\n"
    "Pages inactive:                          131072.\n"
    "Pages speculative:                         4096.\n"
    "Pages wired down:                        131072.\n"
    "Pages occupied by compressor:             65536.\n"
)

PS_AUX = (
    "USER   PID  %CPU %MEM      VSZ    RSS   TT  STAT STARTED      TIME COMMAND\n"
    "alice  812  42.0  3.1 412345678 512000   ??  R    9:02AM   5:12.01 /Applications/Slack.app/Contents/MacOS/Slack --type=renderer\n"
    "alice  455  12.5  8.0 398765432 1300000  ??  S    8:58AM  12:40.55 /Applications/Google Chrome.app/Contents/MacOS/Google Chrome\n"
    "root   101   1.0  0.4 409000000  64000   ??  Ss   8:55AM   0:30.12 /usr/sbin/bluetoothd\n"
)

SYSTEM_PROFILER_POWER = """Power:

    Battery Information:

      Model Information:
          Manufacturer: SMP
          Device Name: bq40z651
      Charge Information:
          Fully Charged: No
          Charging: Yes
          State of Charge (%): 64
      Health Information:
          Cycle Count: 312
          Condition: Normal
          Maximum Capacity: {capacity}%

    AC Charger Information:

      Connected: Yes
      Wattage (W): 70
"""

PMSET_BATT = (
    "Now drawing from 'AC Power'\n"
    " -InternalBattery-0 (id=12345678)\t64%; charging; 1:02 remaining present: true\n"
)

TOP_CPU = (
    "Processes: 612 total, 3 running, 609 sleeping, 3101 threads\n"
    "Load Avg: 2.31, 2.05, 1.98\n"
    "CPU usage: 7.69% user, 11.53% sys, 80.76% idle\n"
)
