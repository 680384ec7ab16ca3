import logging
from os import path
from subprocess import call
from typing import List, Optional

from ppd.dbus import PowerProfilesProxy
from ppd.prints import print_error, print_line, print_warning
from ppd.errors import PpdError
from ppd.types import PowerProfile

log = logging.getLogger(__name__)

# exit codes of a command that could not be run, as in POSIX shells
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127

def list_command(proxy:PowerProfilesProxy) -> None:
    for profile in proxy.profiles():
        details = []
        if profile.cpu_driver: details.append('cpu: '+profile.cpu_driver)
        if profile.platform_driver: details.append('platform: '+profile.platform_driver)
        print_line(profile.name, profile.driver, *details)

def get_command(proxy:PowerProfilesProxy) -> None: print(proxy.active_profile())

def set_command(proxy:PowerProfilesProxy, profile:str) -> None:
    # unknown names are left for the daemon to reject
    proxy.set_active_profile(profile)

def hold_command(proxy:PowerProfilesProxy, application_id:str, reason:str, profile:str) -> None:
    print(proxy.hold_profile(application_id, reason, profile))

def release_command(proxy:PowerProfilesProxy, cookie:int) -> None: proxy.release_hold(cookie)

def list_holds_command(proxy:PowerProfilesProxy) -> None:
    for hold in proxy.active_profile_holds():
        print_line(hold.profile, hold.application_id, *([hold.reason] if hold.reason else []))

def list_actions_command(proxy:PowerProfilesProxy) -> None:
    for action in proxy.actions():
        print_line(action.name, 'enabled' if action.enabled else 'disabled', *([action.description] if action.description else []))

def configure_action_command(proxy:PowerProfilesProxy, action:str, enabled:bool) -> None:
    proxy.set_action_enabled(action, enabled)

def configure_battery_aware_command(proxy:PowerProfilesProxy, enabled:bool) -> None:
    proxy.set_battery_aware(enabled)

def query_battery_aware_command(proxy:PowerProfilesProxy) -> None:
    print('Dynamic changes from charger and battery events:', str(proxy.battery_aware()).lower())

def degraded_command(proxy:PowerProfilesProxy) -> None: print(proxy.performance_degraded() or 'no')

def version_command(proxy:PowerProfilesProxy) -> None: print(proxy.version())

def launch_command(
    proxy:PowerProfilesProxy,
    arguments:List[str],
    profile:Optional[str] = None,
    reason:Optional[str] = None,
    application_id:Optional[str] = None,
) -> int:
    """
    Run a command while holding a profile.

    The hold lives as long as this process keeps its bus connection, and
    is released explicitly once the command exits.

    :param proxy: Connected proxy
    :param arguments: Command line to run
    :param profile: Profile to hold, performance by default
    :param reason: Reason shown to other clients, "Running <command>" by default
    :param application_id: Application id of the hold, the command name by default
    :return: Exit code of the command
    """
    profile = profile or PowerProfile.PERFORMANCE.value
    reason = reason or 'Running '+' '.join(arguments)
    application_id = application_id or path.basename(arguments[0])

    cookie = proxy.hold_profile(application_id, reason, profile)
    log.debug(f'Holding {profile} with cookie {cookie} for {arguments}')
    try:
        return call(arguments)
    except PermissionError as e:
        print_error(f'Unable to run {arguments[0]}:', e.strerror)
        return COMMAND_NOT_EXECUTABLE
    except OSError as e:
        print_error(f'Unable to run {arguments[0]}:', e.strerror)
        return COMMAND_NOT_FOUND
    finally:
        try: proxy.release_hold(cookie)
        except PpdError as e: print_warning(f'Unable to release hold {cookie}:', e.message)

def watch_command(proxy:PowerProfilesProxy) -> None:
    print(proxy.active_profile(), flush=True)
    proxy.on_active_profile_changed(lambda profile: print(profile, flush=True))
    try: proxy.run()
    except KeyboardInterrupt: proxy.quit()
