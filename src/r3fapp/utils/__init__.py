from r3fapp.utils.packages import get_install_cmd
from r3fapp.utils.process import CommandResult, CommandRunner
from r3fapp.utils.update import UpdateStatus, check_for_update

__all__ = [
    "CommandResult",
    "CommandRunner",
    "get_install_cmd",
    "UpdateStatus",
    "check_for_update",
]
