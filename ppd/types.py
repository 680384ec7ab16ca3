from enum import Enum, IntEnum


class PowerProfile(str, Enum):
    POWER_SAVER = "power-saver"
    BALANCED = "balanced"
    PERFORMANCE = "performance"

    def __str__(self) -> str:
        return self.value


class ExitCode(IntEnum):
    SUCCESS = 0
    REMOTE_ERROR = 1
    USAGE_ERROR = 2
    TRANSPORT_ERROR = 3
