"""Bracket week detection and NFL game-window checks.

The current round week is a single global value computed from every
survivor across every god, so all brackets advance in step even when some
leagues report scores earlier than others.
"""

from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from .constants import DISPLAY_ADVANCE_DAYS, GAME_WINDOWS, SPILLOVER_DAYS, SPILLOVER_LAST_HOUR
from .models import Roster


def week_has_scores(teams: Iterable[Roster], week: int) -> bool:
    """True if any team has a strictly nonzero best-ball score for the week."""
    return any(t.best_ball_scores.get(week, 0) != 0 for t in teams)


def detect_current_week(teams: list[Roster], round_weeks: list[int]) -> Optional[int]:
    """
    Find the current playoff round week.

    Walks the round weeks in order and stops at the first week where no
    team has a nonzero score. Returns the week before it, None if the first
    round has no data, or the last round week if every week has data.
    """
    current = None
    for week in round_weeks:
        if not week_has_scores(teams, week):
            break
        current = week
    return current


def latest_score_week(teams: list[Roster], round_weeks: list[int]) -> Optional[int]:
    """Highest round week where any team has a nonzero score."""
    weeks = [w for w in round_weeks if week_has_scores(teams, w)]
    return weeks[-1] if weeks else None


WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


def weekday_name(moment: datetime) -> str:
    return WEEKDAYS[moment.weekday()]


def local_time(now: Optional[datetime], timezone: str) -> datetime:
    tz = ZoneInfo(timezone)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def display_bracket_week(
    latest_week: Optional[int],
    round_weeks: list[int],
    now: Optional[datetime] = None,
    timezone: str = 'America/Detroit',
) -> int:
    """
    Week the bracket UI should treat as "this week".

    Thursday-Monday this is the latest scored week. On Tuesday and
    Wednesday the next round week starts, so it moves one week ahead.
    Before any scores it is the first round week.
    """
    if latest_week is None or latest_week not in round_weeks:
        return round_weeks[0]

    weekday = weekday_name(local_time(now, timezone))
    idx = round_weeks.index(latest_week)
    if weekday in DISPLAY_ADVANCE_DAYS and idx < len(round_weeks) - 1:
        return round_weeks[idx + 1]
    return latest_week


def is_game_window(now: Optional[datetime] = None, timezone: str = 'America/Detroit') -> bool:
    """
    Rough NFL game-time window in league-local time.

    Sunday from 13:00, Monday from 19:00, Thursday from 20:00, plus the
    00:00-01:59 spillover after late games on Monday, Tuesday and Friday.
    """
    local = local_time(now, timezone)
    weekday = weekday_name(local)
    hour = local.hour

    window = GAME_WINDOWS.get(weekday)
    if window and window[0] <= hour <= window[1]:
        return True
    if weekday in SPILLOVER_DAYS and hour <= SPILLOVER_LAST_HOUR:
        return True
    return False
