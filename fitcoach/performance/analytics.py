# -*- coding: utf-8 -*-
"""Performance log — range analytics over logged sets."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

LB_TO_KG = 0.45359237


def to_kg(load: Any, unit: Any) -> float:
    try:
        value = float(load or 0.0)
    except (TypeError, ValueError):
        return 0.0
    if str(unit or "kg").lower() == "lb":
        value *= LB_TO_KG
    return max(value, 0.0)


def set_volume(entry: Dict[str, Any]) -> float:
    """load × reps, in kg."""
    try:
        reps = int(entry.get("reps") or 0)
    except (TypeError, ValueError):
        reps = 0
    return to_kg(entry.get("load"), entry.get("unit")) * max(reps, 0)


def summarize_entries(entries: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    total_entries = 0
    total_volume = 0.0
    total_load = 0.0
    best_load = 0.0
    per_exercise: Dict[str, Dict[str, Any]] = {}

    for entry in entries:
        load = to_kg(entry.get("load"), entry.get("unit"))
        volume = set_volume(entry)
        total_entries += 1
        total_volume += volume
        total_load += load
        best_load = max(best_load, load)

        name = str(entry.get("exercise") or "").strip()
        bucket = per_exercise.setdefault(
            name.lower(), {"exercise": name, "entries": 0, "volume": 0.0, "best_load": 0.0}
        )
        bucket["entries"] += 1
        bucket["volume"] += volume
        bucket["best_load"] = max(bucket["best_load"], load)

    exercises: List[Dict[str, Any]] = []
    for bucket in sorted(per_exercise.values(), key=lambda b: b["volume"], reverse=True):
        exercises.append(
            {
                "exercise": bucket["exercise"],
                "entries": bucket["entries"],
                "volume": round(bucket["volume"], 1),
                "best_load": round(bucket["best_load"], 1),
            }
        )

    return {
        "total_entries": total_entries,
        "total_volume": round(total_volume, 1),
        "best_load": round(best_load, 1),
        "average_load": round(total_load / total_entries, 1) if total_entries else 0.0,
        "exercises": exercises,
    }
