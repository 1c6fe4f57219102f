"""Campaign access control and mutation validation.

CampaignAccessService is the seam between persistence and the rules
engine: it loads users, campaigns, memberships, characters, and star
systems from a Database, then delegates the decision itself to the pure
functions in ``traveller_manager.engine``.

Every ``validate_*`` method returns a Decision. On success its ``data``
is the validated request model, ready for the caller to persist.

Example:
    >>> service = CampaignAccessService(Database("campaigns.db"))
    >>> decision = service.authorize_campaign("user-1", "camp-1", CampaignRole.GAMEMASTER)
    >>> if not decision:
    ...     print(decision.code, decision.error)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from traveller_manager.core.config import Settings, get_settings
from traveller_manager.core.exceptions import PermissionDeniedError
from traveller_manager.core.logging import campaign_context, get_logger
from traveller_manager.engine.characteristics import validate_characteristics
from traveller_manager.engine.dice import parse_dice_notation
from traveller_manager.engine.hexgrid import hexes_within, is_valid_hex_coordinate
from traveller_manager.engine.permissions import (
    check_campaign_permission,
    check_character_permission,
)
from traveller_manager.models.campaign import Decision
from traveller_manager.models.enums import CampaignRole, DecisionCode
from traveller_manager.models.requests import (
    CampaignMemberRequest,
    CharacterCreateRequest,
    DiceRollRequest,
    EquipmentRequest,
    SkillRequest,
    StarSystemRequest,
    format_validation_errors,
)
from traveller_manager.storage.database import Database, StarSystemRecord


logger = get_logger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


class CampaignAccessService:
    """Authorizes campaign actions and validates campaign mutations.

    Attributes:
        database: Source of users, campaigns, memberships, and characters.
        settings: Application settings (campaign limits come from here).
    """

    def __init__(self, database: Database, settings: Settings | None = None) -> None:
        """Initialize the service.

        Args:
            database: Database to read records from.
            settings: Settings to use. Defaults to ``get_settings()``.
        """
        self.database = database
        self.settings = settings or get_settings()

    @staticmethod
    def _coerce(
        model: type[RequestT],
        request: RequestT | Mapping[str, Any],
    ) -> RequestT | Decision:
        if isinstance(request, model):
            return request
        try:
            return model.model_validate(request)
        except PydanticValidationError as exc:
            return Decision.deny(DecisionCode.VALIDATION_ERROR, format_validation_errors(exc))

    # =========================================================================
    # Authorization
    # =========================================================================

    def authorize_campaign(
        self,
        user_id: str,
        campaign_id: str,
        required_role: CampaignRole = CampaignRole.PLAYER,
    ) -> Decision:
        """Decide whether a user may act in a campaign at a role level."""
        with campaign_context(campaign_id, user_id):
            membership = self.database.get_membership(campaign_id, user_id)
            decision = check_campaign_permission(membership, required_role)
            if not decision:
                logger.info("Campaign access denied", code=str(decision.code))
        return decision

    def require_campaign_role(
        self,
        user_id: str,
        campaign_id: str,
        required_role: CampaignRole = CampaignRole.PLAYER,
    ) -> CampaignRole:
        """Like authorize_campaign, but raise instead of returning a denial.

        Returns:
            The user's role in the campaign.

        Raises:
            PermissionDeniedError: If access is denied.
        """
        decision = self.authorize_campaign(user_id, campaign_id, required_role)
        if not decision:
            raise PermissionDeniedError(
                decision.error or "Permission denied",
                code=str(decision.code),
                details={"user_id": user_id, "campaign_id": campaign_id},
            )
        return decision.data["role"]

    def authorize_character(self, user_id: str, character_id: str) -> Decision:
        """Decide whether a user may modify a character.

        The owner always may; otherwise the user needs to be gamemaster of
        the character's campaign.
        """
        with campaign_context(user_id=user_id, character_id=character_id):
            character = self.database.get_character(character_id)
            membership = None
            if character is not None:
                membership = self.database.get_membership(character.campaign_id, user_id)

            decision = check_character_permission(character, user_id, membership)
            if not decision:
                logger.info("Character access denied", code=str(decision.code))
        return decision

    # =========================================================================
    # Mutation Validation
    # =========================================================================

    def validate_character_create(
        self,
        request: CharacterCreateRequest | Mapping[str, Any],
    ) -> Decision:
        """Validate a character creation request.

        Checks, in order: payload shape, characteristic ranges, player and
        campaign existence, active membership, and name uniqueness for the
        player within the campaign.
        """
        parsed = self._coerce(CharacterCreateRequest, request)
        if isinstance(parsed, Decision):
            return parsed

        result = validate_characteristics(parsed.characteristics)
        if not result.is_valid:
            return Decision.deny(DecisionCode.INVALID_CHARACTERISTICS, ", ".join(result.errors))

        if self.database.get_user(parsed.player_id) is None:
            return Decision.deny(DecisionCode.PLAYER_NOT_FOUND, "Player not found")

        if self.database.get_campaign(parsed.campaign_id) is None:
            return Decision.deny(DecisionCode.CAMPAIGN_NOT_FOUND, "Campaign not found")

        membership = self.database.get_membership(parsed.campaign_id, parsed.player_id)
        if membership is None or not membership.is_active:
            return Decision.deny(
                DecisionCode.NOT_CAMPAIGN_MEMBER,
                "Player is not a member of this campaign",
            )

        existing = self.database.find_character_by_name(
            parsed.campaign_id, parsed.player_id, parsed.name
        )
        if existing is not None:
            return Decision.deny(
                DecisionCode.CHARACTER_NAME_EXISTS,
                "Character name already exists for this player in this campaign",
            )

        return Decision.allow(parsed)

    def validate_campaign_create(self, gamemaster_id: str) -> Decision:
        """Check that a user may start another campaign under their tier."""
        gamemaster = self.database.get_user(gamemaster_id)
        if gamemaster is None:
            return Decision.deny(DecisionCode.GAMEMASTER_NOT_FOUND, "Gamemaster not found")

        tier = gamemaster.subscription_tier
        limit = self.settings.campaign.limit_for_tier(tier)
        existing = self.database.count_campaigns_for_gamemaster(gamemaster_id)
        if existing >= limit:
            logger.info("Campaign limit reached", user_id=gamemaster_id, tier=str(tier), limit=limit)
            return Decision.deny(
                DecisionCode.CAMPAIGN_LIMIT_REACHED,
                f"Maximum number of campaigns reached for {tier} tier ({limit})",
            )

        return Decision.allow({"gamemaster_id": gamemaster_id, "remaining": limit - existing - 1})

    def validate_campaign_member(
        self,
        request: CampaignMemberRequest | Mapping[str, Any],
    ) -> Decision:
        """Validate adding a user to a campaign.

        Only PLAYER members count against the campaign's ``max_players``.
        """
        parsed = self._coerce(CampaignMemberRequest, request)
        if isinstance(parsed, Decision):
            return parsed

        campaign = self.database.get_campaign(parsed.campaign_id)
        if campaign is None:
            return Decision.deny(DecisionCode.CAMPAIGN_NOT_FOUND, "Campaign not found")

        if self.database.get_user(parsed.user_id) is None:
            return Decision.deny(DecisionCode.USER_NOT_FOUND, "User not found")

        if self.database.get_membership(parsed.campaign_id, parsed.user_id) is not None:
            return Decision.deny(
                DecisionCode.ALREADY_MEMBER,
                "User is already a member of this campaign",
            )

        if parsed.role == CampaignRole.PLAYER:
            players = self.database.count_members(parsed.campaign_id, CampaignRole.PLAYER)
            if players >= campaign.max_players:
                return Decision.deny(
                    DecisionCode.CAMPAIGN_FULL,
                    f"Campaign is full (max {campaign.max_players} players)",
                )

        return Decision.allow(parsed)

    def validate_dice_roll(self, request: DiceRollRequest | Mapping[str, Any]) -> Decision:
        """Validate a dice roll made in a campaign.

        The notation must parse, the roller and campaign must exist, and
        the roller must be an active member.
        """
        parsed = self._coerce(DiceRollRequest, request)
        if isinstance(parsed, Decision):
            return parsed

        if parse_dice_notation(parsed.notation) is None:
            return Decision.deny(
                DecisionCode.INVALID_DICE_NOTATION,
                f"Invalid dice notation: {parsed.notation}",
            )

        if self.database.get_user(parsed.roller_id) is None:
            return Decision.deny(DecisionCode.ROLLER_NOT_FOUND, "Roller not found")

        if self.database.get_campaign(parsed.campaign_id) is None:
            return Decision.deny(DecisionCode.CAMPAIGN_NOT_FOUND, "Campaign not found")

        membership = self.database.get_membership(parsed.campaign_id, parsed.roller_id)
        if membership is None or not membership.is_active:
            return Decision.deny(
                DecisionCode.NOT_CAMPAIGN_MEMBER,
                "Roller is not a member of this campaign",
            )

        return Decision.allow(parsed)

    def validate_character_skill(self, request: SkillRequest | Mapping[str, Any]) -> Decision:
        """Validate a skill entry (level 0-6)."""
        parsed = self._coerce(SkillRequest, request)
        if isinstance(parsed, Decision):
            return parsed
        return Decision.allow(parsed)

    def validate_character_equipment(
        self,
        request: EquipmentRequest | Mapping[str, Any],
    ) -> Decision:
        """Validate an equipment entry."""
        parsed = self._coerce(EquipmentRequest, request)
        if isinstance(parsed, Decision):
            return parsed
        return Decision.allow(parsed)

    # =========================================================================
    # Star Systems
    # =========================================================================

    def validate_star_system_create(
        self,
        request: StarSystemRequest | Mapping[str, Any],
        campaign_id: str | None = None,
    ) -> Decision:
        """Validate placing a star system on a map.

        Args:
            request: The system payload.
            campaign_id: Campaign whose map receives the system; None for
                the shared map.

        Returns:
            Success with the request model, or a denial with VALIDATION_ERROR,
            INVALID_HEX, CAMPAIGN_NOT_FOUND or HEX_OCCUPIED.
        """
        parsed = self._coerce(StarSystemRequest, request)
        if isinstance(parsed, Decision):
            return parsed

        if not is_valid_hex_coordinate(parsed.hex_location):
            return Decision.deny(
                DecisionCode.INVALID_HEX,
                f"Invalid hex location: {parsed.hex_location} (expected XXYY)",
            )

        if campaign_id is not None and self.database.get_campaign(campaign_id) is None:
            return Decision.deny(DecisionCode.CAMPAIGN_NOT_FOUND, "Campaign not found")

        if self.database.get_star_system_at(parsed.hex_location, campaign_id) is not None:
            logger.info("Hex occupied", hex=parsed.hex_location, campaign_id=campaign_id)
            return Decision.deny(
                DecisionCode.HEX_OCCUPIED,
                f"Star system already exists at hex {parsed.hex_location}",
            )

        return Decision.allow(parsed)

    def systems_within_jump(
        self,
        origin: str,
        jump: int,
        campaign_id: str | None = None,
    ) -> list[tuple[StarSystemRecord, int]]:
        """List the systems on a map reachable from origin with a jump rating.

        The origin's own system, if any, is included at distance 0.

        Raises:
            HexCoordinateError: If origin is not a valid ``XXYY`` location.
        """
        systems = {s.hex_location: s for s in self.database.list_star_systems(campaign_id)}
        return [
            (systems[location], distance)
            for location, distance in hexes_within(origin, systems, jump)
        ]


__all__ = [
    "CampaignAccessService",
]
