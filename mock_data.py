"""
Mock data served when the database connection fails.

Only events and members have a mock dataset. The first read that hits a
connection failure latches :data:`fallback` into mock mode, and every later
read in the process is answered from memory without touching the store.
Writes are refused with 503 while mock mode is engaged.
"""

import copy
import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from pymongo.errors import ConnectionFailure

from database import utcnow
from errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MEMBERS = [
    {
        "id": "mem1",
        "username": "frostbyte",
        "full_name": "Alex Winters",
        "avatar": "https://placehold.co/100/8A2BE2/FFFFFF?text=AW",
        "role": "Player",
        "primary_game": "CS:GO",
        "secondary_games": ["Valorant"],
        "rank": "Pro",
        "bio": "Professional CS:GO player with 5 years of experience",
        "achievements": ["2023 Regional Champion", "MVP Summer Tournament 2022"],
        "social_links": {
            "twitter": "https://twitter.com/frostbyte",
            "instagram": "https://instagram.com/frostbyte",
            "twitch": "https://twitch.tv/frostbyte",
            "youtube": "",
            "discord": "frostbyte#1234",
        },
        "join_date": datetime(2021, 3, 15),
        "created_at": datetime(2021, 3, 15),
        "updated_at": datetime(2023, 1, 10),
    },
    {
        "id": "mem2",
        "username": "neon_blade",
        "full_name": "Sarah Kim",
        "avatar": "https://placehold.co/100/8A2BE2/FFFFFF?text=SK",
        "role": "Coach",
        "primary_game": "League of Legends",
        "secondary_games": [],
        "rank": "Master Coach",
        "bio": "Former pro player turned coach with expertise in team strategy",
        "achievements": ["Coach of the Year 2022", "Championship Winner 2021"],
        "social_links": {
            "twitter": "https://twitter.com/neon_blade",
            "instagram": "https://instagram.com/neon_blade",
            "twitch": "https://twitch.tv/neon_blade",
            "youtube": "https://youtube.com/neon_blade",
            "discord": "neonblade#5678",
        },
        "join_date": datetime(2020, 6, 22),
        "created_at": datetime(2020, 6, 22),
        "updated_at": datetime(2023, 2, 15),
    },
    {
        "id": "mem3",
        "username": "shadowstrike",
        "full_name": "Marcus Johnson",
        "avatar": "https://placehold.co/100/8A2BE2/FFFFFF?text=MJ",
        "role": "Player",
        "primary_game": "Fortnite",
        "secondary_games": ["Apex Legends"],
        "rank": "Elite",
        "bio": "Battle royale specialist with incredible aim and game sense",
        "achievements": ["Fortnite World Cup Qualifier", "3x Tournament Champion"],
        "social_links": {
            "twitter": "https://twitter.com/shadowstrike",
            "instagram": "https://instagram.com/shadowstrike",
            "twitch": "https://twitch.tv/shadowstrike",
            "youtube": "https://youtube.com/shadowstrike",
            "discord": "shadowstrike#9012",
        },
        "join_date": datetime(2022, 1, 10),
        "created_at": datetime(2022, 1, 10),
        "updated_at": datetime(2023, 3, 1),
    },
]

EVENTS = [
    {
        "id": "evt1",
        "name": "Summer Showdown",
        "description": "The biggest CS:GO tournament of the summer",
        "image": "https://placehold.co/800x400/1A0033/00FFFF?text=SUMMER+SHOWDOWN",
        "game": "CS:GO",
        "start_date": datetime(2027, 7, 15),
        "end_date": datetime(2027, 7, 18),
        "location": "Los Angeles, CA",
        "status": "upcoming",
        "teams": ["Team Alpha", "Frost Clan", "Neon Strikers"],
        "prize_pool": 50000,
        "format": "Double Elimination",
        "registration_deadline": datetime(2027, 7, 1),
        "is_public": True,
        "created_at": datetime(2026, 3, 10),
        "updated_at": datetime(2026, 3, 15),
    },
    {
        "id": "evt2",
        "name": "Valorant Champions Tour",
        "description": "Official Valorant tournament with top teams",
        "image": "https://placehold.co/800x400/1A0033/00FFFF?text=VALORANT+TOUR",
        "game": "Valorant",
        "start_date": datetime(2027, 8, 20),
        "end_date": datetime(2027, 8, 27),
        "location": "Berlin, Germany",
        "status": "upcoming",
        "teams": ["Frost Clan", "Shadow Ops", "Team Delta"],
        "prize_pool": 100000,
        "format": "Round Robin + Playoffs",
        "registration_deadline": datetime(2027, 7, 25),
        "is_public": True,
        "created_at": datetime(2026, 4, 1),
        "updated_at": datetime(2026, 4, 5),
    },
    {
        "id": "evt3",
        "name": "League of Legends Invitational",
        "description": "Elite LoL competition featuring the best teams",
        "image": "https://placehold.co/800x400/1A0033/00FFFF?text=LOL+INVITATIONAL",
        "game": "League of Legends",
        "start_date": datetime(2023, 6, 10),
        "end_date": datetime(2023, 6, 12),
        "location": "Seoul, South Korea",
        "status": "completed",
        "teams": ["Neon Strikers", "Team Echo", "Team Foxtrot"],
        "prize_pool": 75000,
        "format": "Single Elimination",
        "registration_deadline": datetime(2023, 5, 20),
        "is_public": True,
        "created_at": datetime(2023, 2, 15),
        "updated_at": datetime(2023, 6, 13),
    },
]


def _select(dataset: List[dict], predicate: Callable[[dict], bool]) -> List[dict]:
    return [copy.deepcopy(item) for item in dataset if predicate(item)]


def list_events(game: Optional[str] = None, status: Optional[str] = None, upcoming: bool = False) -> List[dict]:
    now = utcnow()
    events = _select(
        EVENTS,
        lambda e: (game is None or e["game"] == game)
        and (status is None or e["status"] == status)
        and (not upcoming or (e["status"] == "upcoming" and e["start_date"] >= now)),
    )
    return sorted(events, key=lambda e: e["start_date"])


def find_event(event_id: str) -> Optional[dict]:
    found = _select(EVENTS, lambda e: e["id"] == event_id)
    return found[0] if found else None


def list_members(game: Optional[str] = None) -> List[dict]:
    members = _select(
        MEMBERS,
        lambda m: game is None or m["primary_game"] == game or game in m["secondary_games"],
    )
    return sorted(members, key=lambda m: m["created_at"], reverse=True)


def find_member(member_id: Optional[str] = None, username: Optional[str] = None) -> Optional[dict]:
    found = _select(
        MEMBERS,
        lambda m: (member_id is not None and m["id"] == member_id)
        or (username is not None and m["username"] == username),
    )
    return found[0] if found else None


class FallbackSwitch:
    """Process-wide latch deciding whether reads are served from mock data."""

    def __init__(self):
        self._engaged = False
        self._lock = threading.Lock()

    @property
    def engaged(self) -> bool:
        return self._engaged

    def engage(self, reason: Exception) -> None:
        with self._lock:
            if self._engaged:
                return
            self._engaged = True
        logger.warning("Database unreachable (%s); serving mock data for the rest of this process", reason)

    def reset(self) -> None:
        with self._lock:
            self._engaged = False

    def read(self, from_db: Callable[[], T], from_mock: Callable[[], T]) -> T:
        if self._engaged:
            return from_mock()
        try:
            return from_db()
        except ConnectionFailure as exc:
            self.engage(exc)
            return from_mock()

    def guard_write(self) -> None:
        if self._engaged:
            raise DatabaseUnavailableError()


fallback = FallbackSwitch()


def get_fallback() -> FallbackSwitch:
    return fallback
