"""Campaign and character permission evaluation.

The evaluator is a pure function of the records it is handed: callers
resolve memberships and characters first, then ask for a Decision. A
missing record is passed as None. Plain mappings are accepted and
coerced into the record models; anything that cannot be coerced is
reported as a PERMISSION_ERROR decision rather than raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from traveller_manager.core.logging import get_logger
from traveller_manager.models.campaign import CampaignMembership, CharacterRecord, Decision
from traveller_manager.models.enums import CampaignRole, DecisionCode


logger = get_logger(__name__)

MembershipInput = CampaignMembership | Mapping[str, Any] | None
CharacterInput = CharacterRecord | Mapping[str, Any] | None


def _coerce_membership(membership: MembershipInput) -> CampaignMembership | None:
    if membership is None or isinstance(membership, CampaignMembership):
        return membership
    return CampaignMembership.model_validate(membership)


def _coerce_character(character: CharacterInput) -> CharacterRecord | None:
    if character is None or isinstance(character, CharacterRecord):
        return character
    return CharacterRecord.model_validate(character)


def role_satisfies(role: CampaignRole, required_role: CampaignRole) -> bool:
    """Return True when role is at least as privileged as required_role."""
    return CampaignRole(role).level >= CampaignRole(required_role).level


def check_campaign_permission(
    membership: MembershipInput,
    required_role: CampaignRole = CampaignRole.PLAYER,
) -> Decision:
    """Decide whether a member may act at the required role level.

    Args:
        membership: The user's membership in the campaign, or None.
        required_role: Minimum role needed.

    Returns:
        Success with ``{"role": role}``; NOT_CAMPAIGN_MEMBER when there is
        no active membership; INSUFFICIENT_PERMISSIONS when the role is
        too low; PERMISSION_ERROR when the record is malformed.
    """
    try:
        member = _coerce_membership(membership)
        if member is None or not member.is_active:
            return Decision.deny(
                DecisionCode.NOT_CAMPAIGN_MEMBER,
                "User is not an active member of this campaign",
            )

        if not role_satisfies(member.role, required_role):
            return Decision.deny(
                DecisionCode.INSUFFICIENT_PERMISSIONS,
                f"Insufficient permissions. Required: {required_role}, Current: {member.role}",
            )

        return Decision.allow({"role": member.role})
    except Exception:
        logger.exception("Permission check failed", required_role=str(required_role))
        return Decision.deny(DecisionCode.PERMISSION_ERROR, "Permission validation error")


def check_character_permission(
    character: CharacterInput,
    requesting_user_id: str,
    membership: MembershipInput = None,
) -> Decision:
    """Decide whether a user may modify a character.

    The owning player may always modify their character. Otherwise the
    user needs an active GAMEMASTER membership in the character's
    campaign; a membership of any other campaign grants nothing.

    Args:
        character: The character record, or None if it was not found.
        requesting_user_id: The user asking.
        membership: The user's membership in the character's campaign.

    Returns:
        Success with ``{"character": character}``, or a denial with
        CHARACTER_NOT_FOUND, INSUFFICIENT_PERMISSIONS or PERMISSION_ERROR.
    """
    try:
        record = _coerce_character(character)
        if record is None:
            return Decision.deny(DecisionCode.CHARACTER_NOT_FOUND, "Character not found")

        if record.player_id == requesting_user_id:
            return Decision.allow({"character": record})

        member = _coerce_membership(membership)
        if (
            member is not None
            and member.is_active
            and member.user_id == requesting_user_id
            and member.campaign_id == record.campaign_id
            and member.role == CampaignRole.GAMEMASTER
        ):
            return Decision.allow({"character": record})

        return Decision.deny(
            DecisionCode.INSUFFICIENT_PERMISSIONS,
            "Insufficient permissions to modify this character",
        )
    except Exception:
        logger.exception("Character permission check failed", user_id=requesting_user_id)
        return Decision.deny(
            DecisionCode.PERMISSION_ERROR,
            "Character permission validation error",
        )


__all__ = [
    "role_satisfies",
    "check_campaign_permission",
    "check_character_permission",
]
