"""
Standard error codes for service layer.

These error codes allow callers to programmatically handle specific error
conditions without parsing error message text.

Usage:
    from services.error_codes import GAME_NOT_FOUND, INSUFFICIENT_PLAYERS
    from services.result import Result

    if game is None:
        return Result.fail("Game not found", code=GAME_NOT_FOUND)
"""

# General errors
NOT_FOUND = "not_found"
VALIDATION_ERROR = "validation_error"
STATE_ERROR = "state_error"

# Game errors
GAME_NOT_FOUND = "game_not_found"
GAME_FINISHED = "game_finished"
INVALID_PLAYERS_PER_TEAM = "invalid_players_per_team"
INVALID_SCORE = "invalid_score"

# Player/RSVP errors
PLAYER_NOT_FOUND = "player_not_found"
INVALID_POSITION = "invalid_position"
INVALID_STATUS = "invalid_status"
INVALID_WHATSAPP = "invalid_whatsapp"
DUPLICATE_PLAYER = "duplicate_player"

# Draw errors
INSUFFICIENT_PLAYERS = "insufficient_players"
TEAMS_ALREADY_DRAWN = "teams_already_drawn"
HISTORY_UNAVAILABLE = "history_unavailable"
PERSISTENCE_FAILURE = "persistence_failure"

# Statistics errors
INVALID_SORT_COLUMN = "invalid_sort_column"
