"""Nix build service"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from hostdeploy.process import ProcessRunner


@dataclass(frozen=True)
class NixTarget:
    """What to build: a path with an optional attribute, or an expression."""

    path: Optional[Path] = None
    attr: Optional[str] = None
    expr: Optional[str] = None

    def to_args(self) -> List[str]:
        if self.expr is not None:
            return ["-E", self.expr]
        args = [str(self.path)] if self.path is not None else []
        if self.attr:
            args.extend(["-A", self.attr])
        return args


@dataclass(frozen=True)
class NixArg:
    """A function argument passed to the build expression."""

    name: str
    value: str
    # --argstr passes a string; --arg passes a nix expression
    raw: bool = False

    def to_args(self) -> List[str]:
        return ["--arg" if self.raw else "--argstr", self.name, self.value]


def str_arg(name: str, value: str) -> NixArg:
    return NixArg(name, value)


def bool_arg(name: str, value: bool) -> NixArg:
    return NixArg(name, "true" if value else "false", raw=True)


def raw_arg(name: str, value: str) -> NixArg:
    return NixArg(name, value, raw=True)


def render_string(value: str) -> str:
    """Render a nix string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    return f'"{escaped}"'


def render_attrset(values: Mapping[str, str]) -> str:
    """
    Render a nix attribute set literal from pre-rendered values.

    Keys are emitted in sorted order.
    """
    body = "".join(f"{key} = {values[key]}; " for key in sorted(values))
    return "{ " + body + "}"


class NixService:
    """Runs nix-build and returns its output."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def build_command(
        self,
        target: NixTarget,
        args: Sequence[NixArg] = (),
        builders: Sequence[str] = (),
    ) -> List[str]:
        command = ["nix-build", *target.to_args(), "--no-out-link"]
        for arg in args:
            command.extend(arg.to_args())
        if builders:
            command.extend(["--builders", ";".join(builders)])
        return command

    def build(
        self,
        target: NixTarget,
        args: Sequence[NixArg] = (),
        builders: Sequence[str] = (),
    ) -> str:
        """
        Build a target without creating a result symlink.

        Returns:
            nix-build stdout (one store path per line)

        Raises:
            ExternalToolError: If the build fails
        """
        result = self.runner.run(
            self.build_command(target, args, builders), "Building"
        )
        return result.stdout
