"""SQLite persistence layer for the Traveller Campaign Manager.

Provides persistent storage for:
- Users and their subscription tier
- Campaigns and campaign memberships
- Characters (characteristics stored as JSON)
- Star systems placed on a sector hex map

The rules engine never touches this module; the access service reads
records from here and hands them to the engine as plain models.
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generator
from uuid import uuid4

from traveller_manager.core.constants import DEFAULT_MAX_PLAYERS
from traveller_manager.core.exceptions import DuplicateRecordError, StorageError
from traveller_manager.core.logging import get_logger
from traveller_manager.models.campaign import CampaignMembership, CharacterRecord
from traveller_manager.models.characteristics import Characteristics
from traveller_manager.models.enums import CampaignRole, SubscriptionTier

if TYPE_CHECKING:
    from traveller_manager.core.config import Settings

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class UserRecord:
    """Record of a registered user.

    Attributes:
        id: Unique identifier.
        email: Login email (unique).
        display_name: Name shown to other players.
        subscription_tier: Tier that governs campaign limits.
        created_at: When the user was created.
    """

    id: str
    email: str
    display_name: str
    subscription_tier: SubscriptionTier
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> UserRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            email=row[1],
            display_name=row[2],
            subscription_tier=SubscriptionTier(row[3]),
            created_at=datetime.fromisoformat(row[4]),
        )


@dataclass
class CampaignRecord:
    """Record of a campaign.

    Attributes:
        id: Unique identifier.
        name: Campaign name.
        gamemaster_id: User running the campaign.
        max_players: Player seats (gamemasters and observers excluded).
        created_at: When the campaign was created.
    """

    id: str
    name: str
    gamemaster_id: str
    max_players: int
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> CampaignRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            name=row[1],
            gamemaster_id=row[2],
            max_players=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )


@dataclass
class StarSystemRecord:
    """Record of a star system on a sector map.

    Attributes:
        id: Unique identifier.
        name: System name.
        hex_location: ``XXYY`` map location.
        sector: Sector name.
        campaign_id: Owning campaign, or None for a shared map.
        subsector: Subsector letter or name.
        allegiance: Polity code.
        star_type: Primary star classification.
        gas_giants: Number of gas giants.
    """

    id: str
    name: str
    hex_location: str
    sector: str
    campaign_id: str | None = None
    subsector: str | None = None
    allegiance: str | None = None
    star_type: str | None = None
    gas_giants: int = 0

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> StarSystemRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            name=row[1],
            hex_location=row[2],
            sector=row[3],
            campaign_id=row[4],
            subsector=row[5],
            allegiance=row[6],
            star_type=row[7],
            gas_giants=row[8],
        )


def _membership_from_row(row: tuple[Any, ...]) -> CampaignMembership:
    return CampaignMembership(
        campaign_id=row[0],
        user_id=row[1],
        role=CampaignRole(row[2]),
        is_active=bool(row[3]),
    )


def _character_from_row(row: tuple[Any, ...]) -> CharacterRecord:
    characteristics = None
    if row[4]:
        characteristics = Characteristics(**json.loads(row[4]))
    return CharacterRecord(
        id=row[0],
        name=row[1],
        player_id=row[2],
        campaign_id=row[3],
        characteristics=characteristics,
    )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite database for campaign persistence.

    Each operation opens a short-lived connection, commits on success, and
    rolls back on error. There is no shared module-level instance; build
    one explicitly and pass it to whatever needs it.
    """

    SCHEMA_VERSION = 2

    def __init__(self, db_path: str | Path) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. Parent directories are created.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()

        logger.info("Database initialized", path=str(self.db_path))

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Open the database configured in ``settings.storage``."""
        return cls(settings.storage.database_path)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup.

        Raises:
            DuplicateRecordError: On a uniqueness violation.
            StorageError: On any other integrity violation.
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" in str(e):
                raise DuplicateRecordError(str(e)) from e
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    display_name TEXT NOT NULL DEFAULT '',
                    subscription_tier TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS campaigns (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    gamemaster_id TEXT NOT NULL REFERENCES users(id),
                    max_players INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS campaign_members (
                    campaign_id TEXT NOT NULL REFERENCES campaigns(id),
                    user_id TEXT NOT NULL REFERENCES users(id),
                    role TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    joined_at TEXT NOT NULL,
                    PRIMARY KEY (campaign_id, user_id)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    player_id TEXT NOT NULL REFERENCES users(id),
                    campaign_id TEXT NOT NULL REFERENCES campaigns(id),
                    characteristics_json TEXT,
                    created_at TEXT NOT NULL,
                    UNIQUE (campaign_id, player_id, name)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS star_systems (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    hex_location TEXT NOT NULL,
                    sector TEXT NOT NULL,
                    campaign_id TEXT REFERENCES campaigns(id),
                    subsector TEXT,
                    allegiance TEXT,
                    star_type TEXT,
                    gas_giants INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
            """)

            # One system per hex per campaign; NULL campaign is the shared map
            cursor.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_star_systems_hex
                ON star_systems(IFNULL(campaign_id, ''), hex_location)
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_campaigns_gamemaster
                ON campaigns(gamemaster_id)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # User Operations
    # =========================================================================

    def add_user(
        self,
        email: str,
        display_name: str = "",
        subscription_tier: SubscriptionTier = SubscriptionTier.FREE,
        user_id: str | None = None,
    ) -> UserRecord:
        """Add a new user.

        Args:
            email: Login email; must be unique.
            display_name: Display name.
            subscription_tier: Subscription tier.
            user_id: Explicit identifier; generated when omitted.

        Returns:
            Created user record.

        Raises:
            DuplicateRecordError: If the email or id is already taken.
        """
        record_id = user_id or str(uuid4())
        created_at = datetime.now()
        tier = SubscriptionTier(subscription_tier)

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO users (id, email, display_name, subscription_tier, created_at)
                VALUES (?, ?, ?, ?, ?)
            """, (record_id, email, display_name, tier.value, created_at.isoformat()))

        logger.info("Added user", user_id=record_id, tier=tier.value)

        return UserRecord(
            id=record_id,
            email=email,
            display_name=display_name,
            subscription_tier=tier,
            created_at=created_at,
        )

    def get_user(self, user_id: str) -> UserRecord | None:
        """Get a user by ID.

        Returns:
            User record if found, None otherwise.
        """
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, email, display_name, subscription_tier, created_at
                FROM users WHERE id = ?
            """, (user_id,)).fetchone()

            if row:
                return UserRecord.from_row(tuple(row))
            return None

    # =========================================================================
    # Campaign Operations
    # =========================================================================

    def add_campaign(
        self,
        name: str,
        gamemaster_id: str,
        max_players: int = DEFAULT_MAX_PLAYERS,
        campaign_id: str | None = None,
    ) -> CampaignRecord:
        """Create a campaign and enrol its gamemaster.

        The gamemaster is added as an active GAMEMASTER member in the same
        transaction.

        Args:
            name: Campaign name.
            gamemaster_id: User running the campaign.
            max_players: Player seats.
            campaign_id: Explicit identifier; generated when omitted.

        Returns:
            Created campaign record.

        Raises:
            StorageError: If the gamemaster does not exist.
        """
        record_id = campaign_id or str(uuid4())
        created_at = datetime.now()

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO campaigns (id, name, gamemaster_id, max_players, created_at)
                VALUES (?, ?, ?, ?, ?)
            """, (record_id, name, gamemaster_id, max_players, created_at.isoformat()))
            conn.execute("""
                INSERT INTO campaign_members (campaign_id, user_id, role, is_active, joined_at)
                VALUES (?, ?, ?, 1, ?)
            """, (record_id, gamemaster_id, CampaignRole.GAMEMASTER.value, created_at.isoformat()))

        logger.info("Added campaign", campaign_id=record_id, gamemaster_id=gamemaster_id)

        return CampaignRecord(
            id=record_id,
            name=name,
            gamemaster_id=gamemaster_id,
            max_players=max_players,
            created_at=created_at,
        )

    def get_campaign(self, campaign_id: str) -> CampaignRecord | None:
        """Get a campaign by ID.

        Returns:
            Campaign record if found, None otherwise.
        """
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, name, gamemaster_id, max_players, created_at
                FROM campaigns WHERE id = ?
            """, (campaign_id,)).fetchone()

            if row:
                return CampaignRecord.from_row(tuple(row))
            return None

    def count_campaigns_for_gamemaster(self, gamemaster_id: str) -> int:
        """Count the campaigns a user runs as gamemaster."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM campaigns WHERE gamemaster_id = ?",
                (gamemaster_id,),
            ).fetchone()
            return int(row[0])

    # =========================================================================
    # Membership Operations
    # =========================================================================

    def add_member(
        self,
        campaign_id: str,
        user_id: str,
        role: CampaignRole = CampaignRole.PLAYER,
        is_active: bool = True,
    ) -> CampaignMembership:
        """Add a user to a campaign.

        Raises:
            DuplicateRecordError: If the user is already a member.
        """
        member_role = CampaignRole(role)
        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO campaign_members (campaign_id, user_id, role, is_active, joined_at)
                VALUES (?, ?, ?, ?, ?)
            """, (campaign_id, user_id, member_role.value, int(is_active), datetime.now().isoformat()))

        logger.info("Added campaign member", campaign_id=campaign_id, user_id=user_id, role=member_role.value)

        return CampaignMembership(
            campaign_id=campaign_id,
            user_id=user_id,
            role=member_role,
            is_active=is_active,
        )

    def set_member_active(self, campaign_id: str, user_id: str, is_active: bool) -> bool:
        """Activate or deactivate a membership.

        Returns:
            True if a membership was updated, False if none exists.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("""
                UPDATE campaign_members SET is_active = ?
                WHERE campaign_id = ? AND user_id = ?
            """, (int(is_active), campaign_id, user_id))
            updated = cursor.rowcount > 0

        if updated:
            logger.info("Membership updated", campaign_id=campaign_id, user_id=user_id, is_active=is_active)

        return updated

    def get_membership(self, campaign_id: str, user_id: str) -> CampaignMembership | None:
        """Get a user's membership in a campaign, active or not."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT campaign_id, user_id, role, is_active
                FROM campaign_members WHERE campaign_id = ? AND user_id = ?
            """, (campaign_id, user_id)).fetchone()

            if row:
                return _membership_from_row(tuple(row))
            return None

    def list_members(self, campaign_id: str) -> list[CampaignMembership]:
        """List every membership of a campaign, in join order."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT campaign_id, user_id, role, is_active
                FROM campaign_members WHERE campaign_id = ?
                ORDER BY rowid
            """, (campaign_id,)).fetchall()

            return [_membership_from_row(tuple(row)) for row in rows]

    def count_members(self, campaign_id: str, role: CampaignRole | None = None) -> int:
        """Count a campaign's members, optionally restricted to one role."""
        query = "SELECT COUNT(*) FROM campaign_members WHERE campaign_id = ?"
        params: tuple[Any, ...] = (campaign_id,)
        if role is not None:
            query += " AND role = ?"
            params = (campaign_id, CampaignRole(role).value)

        with self._get_connection() as conn:
            return int(conn.execute(query, params).fetchone()[0])

    # =========================================================================
    # Character Operations
    # =========================================================================

    def add_character(
        self,
        name: str,
        player_id: str,
        campaign_id: str,
        characteristics: Characteristics | None = None,
        character_id: str | None = None,
    ) -> CharacterRecord:
        """Add a character.

        Raises:
            DuplicateRecordError: If the player already has a character of
                that name in the campaign.
        """
        record_id = character_id or str(uuid4())
        characteristics_json = (
            json.dumps(characteristics.model_dump()) if characteristics is not None else None
        )

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO characters
                (id, name, player_id, campaign_id, characteristics_json, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (record_id, name, player_id, campaign_id, characteristics_json,
                  datetime.now().isoformat()))

        logger.info("Added character", character_id=record_id, campaign_id=campaign_id)

        return CharacterRecord(
            id=record_id,
            name=name,
            player_id=player_id,
            campaign_id=campaign_id,
            characteristics=characteristics,
        )

    def get_character(self, character_id: str) -> CharacterRecord | None:
        """Get a character by ID."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, name, player_id, campaign_id, characteristics_json
                FROM characters WHERE id = ?
            """, (character_id,)).fetchone()

            if row:
                return _character_from_row(tuple(row))
            return None

    def find_character_by_name(
        self,
        campaign_id: str,
        player_id: str,
        name: str,
    ) -> CharacterRecord | None:
        """Find a player's character in a campaign by exact name."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, name, player_id, campaign_id, characteristics_json
                FROM characters
                WHERE campaign_id = ? AND player_id = ? AND name = ?
            """, (campaign_id, player_id, name)).fetchone()

            if row:
                return _character_from_row(tuple(row))
            return None

    # =========================================================================
    # Star System Operations
    # =========================================================================

    def add_star_system(
        self,
        name: str,
        hex_location: str,
        sector: str,
        campaign_id: str | None = None,
        subsector: str | None = None,
        allegiance: str | None = None,
        star_type: str | None = None,
        gas_giants: int = 0,
        system_id: str | None = None,
    ) -> StarSystemRecord:
        """Place a star system on a campaign's map, or the shared map.

        Raises:
            DuplicateRecordError: If the hex is already occupied on that map.
            StorageError: If the campaign does not exist.
        """
        record = StarSystemRecord(
            id=system_id or str(uuid4()),
            name=name,
            hex_location=hex_location,
            sector=sector,
            campaign_id=campaign_id,
            subsector=subsector,
            allegiance=allegiance,
            star_type=star_type,
            gas_giants=gas_giants,
        )

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO star_systems
                (id, name, hex_location, sector, campaign_id, subsector,
                 allegiance, star_type, gas_giants, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (record.id, name, hex_location, sector, campaign_id, subsector,
                  allegiance, star_type, gas_giants, datetime.now().isoformat()))

        logger.info("Added star system", system_id=record.id, hex=hex_location, campaign_id=campaign_id)

        return record

    def get_star_system_at(
        self,
        hex_location: str,
        campaign_id: str | None = None,
    ) -> StarSystemRecord | None:
        """Get the system at a hex on a campaign's map (None: the shared map)."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, name, hex_location, sector, campaign_id, subsector,
                       allegiance, star_type, gas_giants
                FROM star_systems WHERE hex_location = ? AND campaign_id IS ?
            """, (hex_location, campaign_id)).fetchone()

            if row:
                return StarSystemRecord.from_row(tuple(row))
            return None

    def list_star_systems(self, campaign_id: str | None = None) -> list[StarSystemRecord]:
        """List the systems on one map, ordered by hex location."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT id, name, hex_location, sector, campaign_id, subsector,
                       allegiance, star_type, gas_giants
                FROM star_systems WHERE campaign_id IS ?
                ORDER BY hex_location
            """, (campaign_id,)).fetchall()

            return [StarSystemRecord.from_row(tuple(row)) for row in rows]


__all__ = [
    "Database",
    "UserRecord",
    "CampaignRecord",
    "StarSystemRecord",
]
