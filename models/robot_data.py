"""
models/robot_data.py
--------------------
Domain model for robot telemetry snapshots and the coercion rules that
turn a loosely-typed API record into a typed database row.
"""

import math
import re
from dataclasses import astuple, dataclass, fields
from datetime import datetime
from typing import Any, Optional, Union

from dateutil.parser import isoparse

NAN = float("nan")

_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but a JSON true is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_float(value: Any) -> float:
    """
    Parse the leading number of a value, e.g. "12.5mm" -> 12.5.

    Returns:
        The parsed float, or NaN when no number can be read.
    """
    if _is_number(value):
        return float(value)
    if not isinstance(value, str):
        return NAN
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return NAN
    text = match.group(1)
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def parse_int(value: Any) -> Union[int, float]:
    """
    Parse the leading integer of a value, e.g. "42.7" -> 42.

    Returns:
        The parsed int, or NaN (a float) when no integer can be read.
    """
    if _is_number(value):
        value = str(value)
    if not isinstance(value, str):
        return NAN
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else NAN


def parse_flag(value: Any) -> bool:
    """Only the exact string "true" counts as True."""
    return isinstance(value, str) and value == "true"


def parse_timestamp(value: Any) -> Any:
    """
    Parse an ISO 8601 string into a naive datetime.

    Values that are not ISO 8601 strings are returned unchanged so the
    database decides whether it accepts them.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError):
        return value
    # TIMESTAMP columns ignore the offset of a literal, keep the wall clock
    return parsed.replace(tzinfo=None)


@dataclass
class RobotDataRecord:
    """
    A single robot telemetry snapshot, ready for the robot_data table.

    Attributes:
        timestamp: When the snapshot was taken.
        organization .. tag: Free-text labels locating the robot.
        positionx/y/z: Tool position (NaN when unknown).
        initialized/running/wsviolation/paused: Status flags.
        speedpercentage: Speed override in percent (NaN when unknown).
        finishedpartnum: Count of finished parts (NaN when unknown).
        m1_torque .. m4_torque: Motor torques (NaN when unknown).
    """
    timestamp: Union[datetime, str, None]
    organization: Optional[str] = None
    division: Optional[str] = None
    plant: Optional[str] = None
    line: Optional[str] = None
    workstation: Optional[str] = None
    type: Optional[str] = None
    tag: Optional[str] = None
    positionx: float = NAN
    positiony: float = NAN
    positionz: float = NAN
    initialized: bool = False
    running: bool = False
    wsviolation: bool = False
    paused: bool = False
    speedpercentage: Union[int, float] = NAN
    finishedpartnum: Union[int, float] = NAN
    m1_torque: float = NAN
    m2_torque: float = NAN
    m3_torque: float = NAN
    m4_torque: float = NAN

    @classmethod
    def from_raw(cls, item: dict) -> "RobotDataRecord":
        """
        Build a record from one API object. Never raises; missing or
        malformed fields fall back to None / NaN / False, and a value
        that is not an object yields an all-empty record.
        """
        get = item.get if isinstance(item, dict) else {}.get
        return cls(
            timestamp=parse_timestamp(get("timestamp")),
            organization=get("organization"),
            division=get("division"),
            plant=get("plant"),
            line=get("line"),
            workstation=get("workstation"),
            type=get("type"),
            tag=get("tag"),
            positionx=parse_float(get("positionx")),
            positiony=parse_float(get("positiony")),
            positionz=parse_float(get("positionz")),
            initialized=parse_flag(get("initialized")),
            running=parse_flag(get("running")),
            wsviolation=parse_flag(get("wsviolation")),
            paused=parse_flag(get("paused")),
            speedpercentage=parse_int(get("speedpercentage")),
            finishedpartnum=parse_int(get("finishedpartnum")),
            m1_torque=parse_float(get("m1_torque")),
            m2_torque=parse_float(get("m2_torque")),
            m3_torque=parse_float(get("m3_torque")),
            m4_torque=parse_float(get("m4_torque")),
        )

    def as_row(self) -> tuple:
        """Values in COLUMNS order, for a parameterized INSERT."""
        return astuple(self)

    def __str__(self) -> str:
        return f"{self.tag or '?'} @ {self.workstation or '?'} | {self.timestamp}"


COLUMNS: tuple = tuple(f.name for f in fields(RobotDataRecord))
