# -*- coding: utf-8 -*-
"""Weekly aggregation: this week's training and nutrition against last week.

The current window runs from the start of the UTC day six days ago up to
``now``; the previous window is the seven days before it. Everything here
is pure so it can be exercised with fixed clocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..performance.analytics import set_volume, to_kg
from ..timeutil import parse_timestamp, start_of_day, to_iso, utc_now

WINDOW_DAYS = 7


@dataclass(frozen=True)
class WeekWindows:
    current_start: datetime
    now: datetime

    @property
    def previous_start(self) -> datetime:
        return self.current_start - timedelta(days=WINDOW_DAYS)

    def in_current(self, ts: datetime) -> bool:
        return self.current_start <= ts <= self.now

    def in_previous(self, ts: datetime) -> bool:
        return self.previous_start <= ts < self.current_start


def week_windows(now: Optional[datetime] = None) -> WeekWindows:
    """Seven UTC days ending at `now`; the start is day-aligned so a date-only log never straddles windows."""
    now = now or utc_now()
    return WeekWindows(current_start=start_of_day(now) - timedelta(days=WINDOW_DAYS - 1), now=now)


def _split_entries(
    entries: Iterable[Dict[str, Any]], windows: WeekWindows
) -> Tuple[List[Tuple[datetime, Dict[str, Any]]], List[Tuple[datetime, Dict[str, Any]]]]:
    current: List[Tuple[datetime, Dict[str, Any]]] = []
    previous: List[Tuple[datetime, Dict[str, Any]]] = []
    for entry in entries:
        ts = parse_timestamp(entry.get("performed_at"))
        if ts is None:
            continue
        if windows.in_current(ts):
            current.append((ts, entry))
        elif windows.in_previous(ts):
            previous.append((ts, entry))
    current.sort(key=lambda item: item[0])
    previous.sort(key=lambda item: item[0])
    return current, previous


def _max_loads(entries: List[Tuple[datetime, Dict[str, Any]]]) -> Dict[str, Tuple[str, float]]:
    """Lower-cased exercise -> (first spelling seen, max load in kg)."""
    out: Dict[str, Tuple[str, float]] = {}
    for _, entry in entries:
        name = str(entry.get("exercise") or "").strip()
        if not name:
            continue
        key = name.lower()
        load = to_kg(entry.get("load"), entry.get("unit"))
        if key in out:
            spelling, best = out[key]
            out[key] = (spelling, max(best, load))
        else:
            out[key] = (name, load)
    return out


def best_lift_delta(
    current: List[Tuple[datetime, Dict[str, Any]]],
    previous: List[Tuple[datetime, Dict[str, Any]]],
) -> Dict[str, Any]:
    current_max = _max_loads(current)
    previous_max = _max_loads(previous)
    best_name: Optional[str] = None
    best_delta = 0.0
    for key, (spelling, load) in current_max.items():
        if key not in previous_max:
            continue
        delta = load - previous_max[key][1]
        if delta > best_delta:
            best_name, best_delta = spelling, delta
    return {"exercise": best_name, "delta": round(best_delta, 1)}


def _scan_protein(scan: Dict[str, Any]) -> float:
    result = scan.get("result") or {}
    macros = result.get("macros") or {}
    try:
        return float(macros.get("protein_grams") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _scan_calories(scan: Dict[str, Any]) -> float:
    result = scan.get("result") or {}
    try:
        return float(result.get("total_calories") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def compute_weekly_stats(
    entries: Iterable[Dict[str, Any]],
    scans: Iterable[Dict[str, Any]],
    *,
    protein_target: float,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    windows = week_windows(now)
    current, previous = _split_entries(entries, windows)

    sessions = len({ts.date() for ts, _ in current})
    volume = sum(set_volume(e) for _, e in current)
    previous_volume = sum(set_volume(e) for _, e in previous)

    week_scans = []
    for scan in scans:
        ts = parse_timestamp(scan.get("created_at"))
        if ts is not None and windows.in_current(ts):
            week_scans.append(scan)
    calories = [_scan_calories(s) for s in week_scans]
    protein_warnings = sum(1 for s in week_scans if _scan_protein(s) < protein_target)

    return {
        "period_start": to_iso(windows.current_start),
        "performance": {
            "sessions": sessions,
            "volume": round(volume, 1),
            "previous_volume": round(previous_volume, 1),
            "volume_delta": round(volume - previous_volume, 1),
            "best_lift_delta": best_lift_delta(current, previous),
        },
        "nutrition": {
            "scans": len(week_scans),
            "avg_calories": round(sum(calories) / len(calories), 1) if calories else 0.0,
            "protein_warnings": protein_warnings,
            "protein_target": protein_target,
        },
    }
