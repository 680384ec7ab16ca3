#!/usr/bin/env python3
#
# ppd - query and control power-profiles-daemon from the command line
#
# Run without a command to list the available profiles.

import click

from ppd import __version__
from ppd.commands import (
    configure_action_command, configure_battery_aware_command, degraded_command, get_command, hold_command,
    launch_command, list_actions_command, list_command, list_holds_command, query_battery_aware_command,
    release_command, set_command, version_command, watch_command
)
from ppd.dbus import DEFAULT_TIMEOUT, connect
from ppd.errors import PpdError
from ppd.prints import print_error
from ppd.tools import setup_logger

COOKIE = click.IntRange(0, 2**32 - 1)

def dispatch(command, *args):
    """Connect, run one command against the daemon, disconnect."""
    ctx = click.get_current_context()
    try:
        with connect(timeout=ctx.obj["timeout"]) as proxy:
            return command(proxy, *args)
    except PpdError as e:
        print_error(e.message)
        ctx.exit(e.exit_code)

def enabled_flag(enable:bool, disable:bool) -> bool:
    if enable and disable: raise click.UsageError("can't set both --enable and --disable")
    if not (enable or disable): raise click.UsageError("--enable or --disable is required")
    return enable

@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Log D-Bus traffic to stderr")
@click.option("--timeout", type=click.IntRange(min=1), default=DEFAULT_TIMEOUT, show_default=True,
              help="D-Bus method call timeout in milliseconds")
@click.version_option(__version__, prog_name="ppd")
@click.pass_context
def main(ctx, debug, timeout):
    """Interact with power-profiles-daemon."""
    setup_logger(debug)
    ctx.ensure_object(dict)["timeout"] = timeout
    if ctx.invoked_subcommand is None: dispatch(list_command)

@main.command("list")
def list_profiles():
    """List all available power profiles"""
    dispatch(list_command)

@main.command("get")
def get():
    """Get the currently active profile"""
    dispatch(get_command)

@main.command("set")
@click.argument("profile")
def set_profile(profile):
    """Set the active power profile"""
    dispatch(set_command, profile)

@main.command("hold")
@click.argument("application_id")
@click.argument("reason")
@click.argument("profile")
def hold(application_id, reason, profile):
    """Hold a profile and print the hold cookie

    The daemon drops the hold when this command disconnects; use "launch"
    to keep a hold for the lifetime of another program.
    """
    dispatch(hold_command, application_id, reason, profile)

@main.command("release")
@click.argument("cookie", type=COOKIE)
def release(cookie):
    """Release a profile hold"""
    dispatch(release_command, cookie)

@main.command("list-holds")
def list_holds():
    """List active profile holds"""
    dispatch(list_holds_command)

@main.command("list-actions")
def list_actions():
    """List all available actions"""
    dispatch(list_actions_command)

@main.command("configure-action")
@click.argument("action")
@click.option("--enable", is_flag=True, help="Enable the action")
@click.option("--disable", is_flag=True, help="Disable the action")
def configure_action(action, enable, disable):
    """Enable or disable an action"""
    dispatch(configure_action_command, action, enabled_flag(enable, disable))

@main.command("configure-battery-aware")
@click.option("--enable", is_flag=True, help="Enable battery-aware behavior")
@click.option("--disable", is_flag=True, help="Disable battery-aware behavior")
def configure_battery_aware(enable, disable):
    """Configure battery-aware behavior"""
    dispatch(configure_battery_aware_command, enabled_flag(enable, disable))

@main.command("query-battery-aware")
def query_battery_aware():
    """Query whether battery-aware behavior is enabled"""
    dispatch(query_battery_aware_command)

@main.command("degraded")
def degraded():
    """Show why performance is degraded, if it is"""
    dispatch(degraded_command)

@main.command("version")
def version():
    """Show the daemon version"""
    dispatch(version_command)

@main.command("launch", context_settings={"ignore_unknown_options": True})
@click.option("-p", "--profile", help="Profile to use for the application [default: performance]")
@click.option("-r", "--reason", help="Reason for the profile hold")
@click.option("-i", "--appid", help="Application ID for the profile hold")
@click.argument("arguments", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def launch(ctx, profile, reason, appid, arguments):
    """Launch an application while holding a power profile"""
    ctx.exit(dispatch(launch_command, list(arguments), profile, reason, appid))

@main.command("watch")
def watch():
    """Print the active profile every time it changes"""
    dispatch(watch_command)


if __name__ == "__main__":
    main()
