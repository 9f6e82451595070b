"""
Centralized configuration for the racha organizer.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


DB_PATH = os.getenv("DB_PATH", "racha.db")

# Team size bounds enforced when a game is created
DEFAULT_PLAYERS_PER_TEAM = _parse_int("DEFAULT_PLAYERS_PER_TEAM", 5)
MIN_PLAYERS_PER_TEAM = _parse_int("MIN_PLAYERS_PER_TEAM", 3)
MAX_PLAYERS_PER_TEAM = _parse_int("MAX_PLAYERS_PER_TEAM", 11)

# Closed position vocabulary; anything else is ignored by position balancing
POSITIONS: tuple[str, ...] = ("Zagueiro", "Meio-Campo", "Atacante")

# RSVP statuses
STATUS_CONFIRMED = "confirmed"
STATUS_MAYBE = "maybe"
STATUS_NOT_GOING = "not_going"
PLAYER_STATUSES: tuple[str, ...] = (STATUS_CONFIRMED, STATUS_MAYBE, STATUS_NOT_GOING)

DRAW_SETTINGS: dict[str, Any] = {
    "strength_weight": _parse_float("DRAW_STRENGTH_WEIGHT", 1.0),
    "position_weight": _parse_float("DRAW_POSITION_WEIGHT", 1.3),
    "teammate_weight": _parse_float("DRAW_TEAMMATE_WEIGHT", 1.0),
    # Upper bound (exclusive) of the uniform jitter added to each strength
    "strength_jitter": _parse_float("DRAW_STRENGTH_JITTER", 0.1),
    # Upper bound (exclusive) of the uniform jitter added to each placement cost
    "cost_jitter": _parse_float("DRAW_COST_JITTER", 0.05),
    # Number of most recent drawn games considered for teammate repetition
    "recent_games_window": _parse_int("DRAW_RECENT_GAMES_WINDOW", 12),
}

# Per-counter multipliers for the strength score
STRENGTH_WEIGHTS: dict[str, float] = {
    "wins": 2.0,
    "goals": 1.0,
    "assists": 0.5,
    "draws": 0.5,
    "losses": -0.5,
}

# Statistics listing
LEADERBOARD_LIMIT = _parse_int("LEADERBOARD_LIMIT", 50)

# Audit trail can be switched off for bulk imports
AUDIT_LOG_ENABLED = _parse_bool("AUDIT_LOG_ENABLED", True)

# Input sanitization
PLAYER_NAME_MAX_LENGTH = _parse_int("PLAYER_NAME_MAX_LENGTH", 80)
