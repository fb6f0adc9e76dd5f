"""Locked dependency set: parse, verify, and write ``name==version`` pins.

Activation succeeds only when every pin whose environment marker applies
is installed at exactly the pinned version. All problems are collected and
reported together in one :class:`DependencyResolutionError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from importlib import metadata
from pathlib import Path

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

from bootkit.domain.context import LockPin, LockReport
from bootkit.domain.errors import DependencyResolutionError

logger = logging.getLogger(__name__)

LOCK_HEADER = "# Locked by bootkit. Edit with `bootkit lock`."


def _parse_line(line: str, *, source: Path, lineno: int) -> LockPin | None:
    text = line.split("#", 1)[0].strip()
    if not text:
        return None

    where = f"{source}:{lineno}"
    try:
        req = Requirement(text)
    except InvalidRequirement as exc:
        raise DependencyResolutionError(
            f"{where}: invalid requirement {text!r}",
            detail={"line": lineno, "reason": str(exc)},
        ) from exc

    specs = list(req.specifier)
    if req.url or len(specs) != 1 or specs[0].operator != "==" or "*" in specs[0].version:
        raise DependencyResolutionError(
            f"{where}: {text!r} is not an exact pin (expected name==version)",
            detail={"line": lineno},
        )

    if req.marker is not None and not req.marker.evaluate():
        logger.debug("Skipping %s: marker does not apply", text)
        return None

    return LockPin(name=canonicalize_name(req.name), version=specs[0].version)


def parse_lockfile(path: Path) -> list[LockPin]:
    """Read pins from *path*, skipping blanks, comments and inapplicable markers."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DependencyResolutionError(
            f"Dependency manifest not found: {path}", detail={"manifest": str(path)}
        ) from exc
    except UnicodeDecodeError as exc:
        raise DependencyResolutionError(
            f"Dependency manifest {path} is not UTF-8 text: {exc.reason} at byte {exc.start}",
            detail={"manifest": str(path)},
        ) from exc
    except OSError as exc:
        raise DependencyResolutionError(
            f"Cannot read dependency manifest {path}: {exc}", detail={"manifest": str(path)}
        ) from exc

    pins: list[LockPin] = []
    for lineno, line in enumerate(raw.splitlines(), start=1):
        pin = _parse_line(line, source=path, lineno=lineno)
        if pin is not None:
            pins.append(pin)
    return pins


def _same_version(installed: str, locked: str) -> bool:
    try:
        return Version(installed) == Version(locked)
    except InvalidVersion:
        return installed == locked


def activate_lock(
    path: Path,
    *,
    version_of: Callable[[str], str] = metadata.version,
) -> LockReport:
    """Verify the installed environment matches the lock at *path*."""
    pins = parse_lockfile(path)
    missing: list[str] = []
    mismatched: list[dict[str, str]] = []

    for pin in pins:
        try:
            installed = version_of(pin.name)
        except metadata.PackageNotFoundError:
            missing.append(str(pin))
            continue
        if not _same_version(installed, pin.version):
            mismatched.append({"name": pin.name, "locked": pin.version, "installed": installed})

    if missing or mismatched:
        problems = [f"{name} is not installed" for name in missing]
        problems += [
            f"{m['name']} {m['installed']} is installed but {m['locked']} is locked"
            for m in mismatched
        ]
        raise DependencyResolutionError(
            f"Environment does not match {path}: " + "; ".join(problems),
            detail={"manifest": str(path), "missing": missing, "mismatched": mismatched},
        )

    logger.debug("Activated %d locked dependencies from %s", len(pins), path)
    return LockReport(manifest=path, pins=pins)


def installed_pins(names: Iterable[str] | None = None) -> list[LockPin]:
    """Pins for the installed versions of *names* (or of every distribution)."""
    found: dict[str, LockPin] = {}
    for dist in metadata.distributions():
        dist_name = dist.metadata.get("Name")
        if not dist_name:
            continue
        key = canonicalize_name(dist_name)
        found.setdefault(key, LockPin(name=key, version=dist.version))

    if names is None:
        return sorted(found.values(), key=lambda p: p.name)

    wanted = [canonicalize_name(n) for n in names]
    absent = [n for n in wanted if n not in found]
    if absent:
        raise DependencyResolutionError(
            "Cannot lock distributions that are not installed: " + ", ".join(absent),
            detail={"missing": absent},
        )
    return sorted((found[n] for n in dict.fromkeys(wanted)), key=lambda p: p.name)


def write_lockfile(path: Path, pins: Iterable[LockPin]) -> Path:
    """Write *pins* to *path*, one per line, under a header comment."""
    lines = [LOCK_HEADER, *(str(pin) for pin in pins)]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
