# Copyright (c) Syntropy Systems
"""The tunable catalog: which host settings are changed, in which order.

The values here are literal payload. Groups only bundle primitive
commands; none of them reads the result of another.
"""
from __future__ import annotations

import shlex
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tuneup.controller import ModeController, Outcome
    from tuneup.reporter import Reporter
    from tuneup.runner import CommandRunner

# Shared by the live sysctl group and /etc/sysctl.conf.
KERNEL_PARAMETERS: tuple[tuple[str, str], ...] = (
    ("kern.ipc.somaxconn", "2048"),
    ("net.inet.tcp.msl", "15000"),
    ("net.inet.tcp.delayed_ack", "0"),
    ("net.inet.tcp.sendspace", "1048576"),
    ("net.inet.tcp.recvspace", "1048576"),
)

MAXFILES_LIMIT = 524288


@dataclass(frozen=True)
class Action:
    """One idempotent tunable-setting command."""

    key: str
    summary: str
    argv: tuple[str, ...]

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ActionGroup:
    """An ordered bundle of related actions, announced by one banner."""

    name: str
    banner: str
    actions: tuple[Action, ...]

    def run(
        self,
        controller: ModeController,
        reporter: Reporter,
        runner: CommandRunner,
    ) -> list[Outcome]:
        _ = reporter.log(self.banner)
        return [
            controller.execute(action.command_line, partial(runner, action.argv))
            for action in self.actions
        ]


def _defaults(key: str, summary: str, *args: str) -> Action:
    return Action(key, summary, ("defaults", *args))


def _pmset(setting: str, value: int) -> Action:
    return Action(
        f"pmset.{setting}",
        f"pmset {setting} = {value}",
        ("pmset", "-a", setting, str(value)),
    )


def spotlight_group() -> ActionGroup:
    return ActionGroup(
        "spotlight",
        "Disabling Spotlight indexing on all volumes...",
        (
            Action(
                "spotlight.index",
                "Turn off indexing on every volume",
                ("mdutil", "-a", "-i", "off"),
            ),
        ),
    )


def animations_group() -> ActionGroup:
    return ActionGroup(
        "animations",
        "Disabling GUI animations...",
        (
            _defaults(
                "animations.window",
                "No window open/close animations",
                "write", "NSGlobalDomain", "NSAutomaticWindowAnimationsEnabled",
                "-bool", "false",
            ),
            _defaults(
                "animations.resize",
                "Near-instant window resize",
                "write", "NSGlobalDomain", "NSWindowResizeTime", "-float", "0.001",
            ),
            _defaults(
                "animations.dock_launch",
                "No Dock launch bounce",
                "write", "com.apple.dock", "launchanim", "-bool", "false",
            ),
            _defaults(
                "animations.expose",
                "Fast Mission Control",
                "write", "com.apple.dock", "expose-animation-duration",
                "-float", "0.1",
            ),
            _defaults(
                "animations.finder",
                "No Finder animations",
                "write", "com.apple.finder", "DisableAllAnimations", "-bool", "true",
            ),
            _defaults(
                "animations.reduce_motion",
                "Reduce motion",
                "write", "com.apple.universalaccess", "reduceMotion", "-bool", "true",
            ),
            _defaults(
                "animations.reduce_transparency",
                "Reduce transparency",
                "write", "com.apple.universalaccess", "reduceTransparency",
                "-bool", "true",
            ),
        ),
    )


def visual_effects_group() -> ActionGroup:
    return ActionGroup(
        "visual_effects",
        "Reducing visual effects...",
        (
            _defaults(
                "visual.dashboard",
                "Disable Dashboard",
                "write", "com.apple.dashboard", "mcx-disabled", "-bool", "true",
            ),
            _defaults(
                "visual.screenshot_shadow",
                "No shadow on window screenshots",
                "write", "com.apple.screencapture", "disable-shadow", "-bool", "true",
            ),
            _defaults(
                "visual.font_smoothing",
                "No font smoothing",
                "-currentHost", "write", "-g", "AppleFontSmoothing", "-int", "0",
            ),
        ),
    )


def background_services_group(user_id: int) -> ActionGroup:
    domain = f"user/{user_id}"
    return ActionGroup(
        "background_services",
        "Disabling unnecessary background services...",
        (
            _defaults(
                "services.siri_menu",
                "Hide Siri from the menu bar",
                "write", "com.apple.Siri", "StatusMenuVisible", "-bool", "false",
            ),
            _defaults(
                "services.siri_declined",
                "Decline Siri",
                "write", "com.apple.Siri", "UserHasDeclinedEnable", "-bool", "true",
            ),
            Action(
                "services.siri_agent",
                "Disable the Siri agent",
                ("launchctl", "disable", f"{domain}/com.apple.Siri.agent"),
            ),
            Action(
                "services.gamed",
                "Disable Game Center",
                ("launchctl", "disable", f"{domain}/com.apple.gamed"),
            ),
            _defaults(
                "services.airdrop",
                "Disable AirDrop",
                "write", "com.apple.NetworkBrowser", "DisableAirDrop", "-bool", "true",
            ),
            _defaults(
                "services.software_update",
                "No automatic update downloads",
                "write", "com.apple.SoftwareUpdate", "AutomaticDownload",
                "-bool", "false",
            ),
            _defaults(
                "services.app_store",
                "No automatic App Store updates",
                "write", "com.apple.commerce", "AutoUpdate", "-bool", "false",
            ),
        ),
    )


def power_management_group() -> ActionGroup:
    return ActionGroup(
        "power_management",
        "Optimizing power management for server use...",
        (
            _pmset("sleep", 0),
            _pmset("disksleep", 0),
            _pmset("displaysleep", 5),
            _pmset("womp", 1),
            _pmset("autorestart", 1),
            _pmset("powernap", 0),
            _pmset("proximitywake", 0),
            _pmset("tcpkeepalive", 1),
            _pmset("ttyskeepawake", 1),
        ),
    )


def kernel_parameters_group() -> ActionGroup:
    return ActionGroup(
        "kernel_parameters",
        "Optimizing kernel parameters...",
        tuple(
            Action(f"sysctl.{name}", f"{name} = {value}", ("sysctl", "-w", f"{name}={value}"))
            for name, value in KERNEL_PARAMETERS
        ),
    )


def app_nap_group() -> ActionGroup:
    return ActionGroup(
        "app_nap",
        "Disabling App Nap and automatic termination...",
        (
            _defaults(
                "app_nap.sleep",
                "Disable App Nap",
                "write", "NSGlobalDomain", "NSAppSleepDisabled", "-bool", "true",
            ),
            _defaults(
                "app_nap.termination",
                "Disable automatic termination",
                "write", "NSGlobalDomain", "NSDisableAutomaticTermination",
                "-bool", "true",
            ),
        ),
    )


def restart_ui_group() -> ActionGroup:
    return ActionGroup(
        "restart_ui",
        "Restarting UI processes to apply changes...",
        (
            Action("restart.dock", "Restart Dock", ("killall", "Dock")),
            Action("restart.finder", "Restart Finder", ("killall", "Finder")),
        ),
    )
