"""Tests for campaign and character permission decisions."""

from __future__ import annotations

import pytest

from traveller_manager.engine.permissions import (
    check_campaign_permission,
    check_character_permission,
    role_satisfies,
)
from traveller_manager.models.campaign import CampaignMembership, CharacterRecord
from traveller_manager.models.enums import CampaignRole, DecisionCode


def membership(
    role: CampaignRole,
    *,
    user_id: str = "user-1",
    campaign_id: str = "camp-1",
    is_active: bool = True,
) -> CampaignMembership:
    """Build a membership record."""
    return CampaignMembership(
        campaign_id=campaign_id,
        user_id=user_id,
        role=role,
        is_active=is_active,
    )


@pytest.fixture
def character() -> CharacterRecord:
    """Provide a character owned by ``owner-1`` in ``camp-1``."""
    return CharacterRecord(id="char-1", name="Jamison", player_id="owner-1", campaign_id="camp-1")


class TestRoleHierarchy:
    """Tests for role ordering."""

    def test_total_order(self) -> None:
        """Test GAMEMASTER > PLAYER > OBSERVER."""
        assert CampaignRole.GAMEMASTER.level > CampaignRole.PLAYER.level > CampaignRole.OBSERVER.level

    @pytest.mark.parametrize("role", list(CampaignRole))
    def test_reflexive(self, role: CampaignRole) -> None:
        """Test every role satisfies itself."""
        assert role_satisfies(role, role)

    def test_monotonic(self) -> None:
        """Test a higher role satisfies everything a lower one does."""
        for required in CampaignRole:
            if role_satisfies(CampaignRole.OBSERVER, required):
                assert role_satisfies(CampaignRole.PLAYER, required)
            if role_satisfies(CampaignRole.PLAYER, required):
                assert role_satisfies(CampaignRole.GAMEMASTER, required)


class TestCheckCampaignPermission:
    """Tests for campaign-level permission checks."""

    def test_no_membership(self) -> None:
        """Test a missing membership is NOT_CAMPAIGN_MEMBER."""
        decision = check_campaign_permission(None)

        assert decision.success is False
        assert decision.code == DecisionCode.NOT_CAMPAIGN_MEMBER
        assert decision.error == "User is not an active member of this campaign"

    def test_inactive_membership(self) -> None:
        """Test an inactive membership grants nothing."""
        decision = check_campaign_permission(membership(CampaignRole.GAMEMASTER, is_active=False))

        assert decision.code == DecisionCode.NOT_CAMPAIGN_MEMBER

    def test_insufficient_role(self) -> None:
        """Test a lower role is INSUFFICIENT_PERMISSIONS with both roles named."""
        decision = check_campaign_permission(
            membership(CampaignRole.PLAYER),
            CampaignRole.GAMEMASTER,
        )

        assert decision.code == DecisionCode.INSUFFICIENT_PERMISSIONS
        assert decision.error == "Insufficient permissions. Required: GAMEMASTER, Current: PLAYER"

    @pytest.mark.parametrize(
        ("role", "required", "allowed"),
        [
            (CampaignRole.GAMEMASTER, CampaignRole.GAMEMASTER, True),
            (CampaignRole.GAMEMASTER, CampaignRole.OBSERVER, True),
            (CampaignRole.PLAYER, CampaignRole.PLAYER, True),
            (CampaignRole.PLAYER, CampaignRole.OBSERVER, True),
            (CampaignRole.OBSERVER, CampaignRole.OBSERVER, True),
            (CampaignRole.OBSERVER, CampaignRole.PLAYER, False),
            (CampaignRole.PLAYER, CampaignRole.GAMEMASTER, False),
        ],
    )
    def test_matrix(self, role: CampaignRole, required: CampaignRole, allowed: bool) -> None:
        """Test the role/requirement matrix."""
        decision = check_campaign_permission(membership(role), required)

        assert decision.success is allowed
        if allowed:
            assert decision.data == {"role": role}

    def test_default_requirement_is_player(self) -> None:
        """Test observers are refused by default."""
        assert not check_campaign_permission(membership(CampaignRole.OBSERVER))

    def test_mapping_input(self) -> None:
        """Test plain mappings are coerced."""
        decision = check_campaign_permission(
            {"campaign_id": "camp-1", "user_id": "user-1", "role": "GAMEMASTER", "is_active": True},
            CampaignRole.GAMEMASTER,
        )

        assert decision.success is True

    def test_malformed_record(self) -> None:
        """Test an uncoercible record is PERMISSION_ERROR, not an exception."""
        decision = check_campaign_permission({"campaign_id": "camp-1", "role": "CAPTAIN"})

        assert decision.code == DecisionCode.PERMISSION_ERROR
        assert decision.error == "Permission validation error"


class TestCheckCharacterPermission:
    """Tests for character-level permission checks."""

    def test_missing_character(self) -> None:
        """Test a missing character is CHARACTER_NOT_FOUND."""
        decision = check_character_permission(None, "owner-1")

        assert decision.code == DecisionCode.CHARACTER_NOT_FOUND
        assert decision.error == "Character not found"

    def test_owner_allowed(self, character: CharacterRecord) -> None:
        """Test the owning player may modify the character."""
        decision = check_character_permission(character, "owner-1")

        assert decision.success is True
        assert decision.data == {"character": character}

    def test_gamemaster_allowed(self, character: CharacterRecord) -> None:
        """Test the campaign gamemaster may modify the character."""
        decision = check_character_permission(
            character,
            "gm-1",
            membership(CampaignRole.GAMEMASTER, user_id="gm-1"),
        )

        assert decision.success is True

    def test_other_player_denied(self, character: CharacterRecord) -> None:
        """Test another player is refused."""
        decision = check_character_permission(
            character,
            "user-2",
            membership(CampaignRole.PLAYER, user_id="user-2"),
        )

        assert decision.code == DecisionCode.INSUFFICIENT_PERMISSIONS
        assert decision.error == "Insufficient permissions to modify this character"

    def test_gamemaster_of_other_campaign_denied(self, character: CharacterRecord) -> None:
        """Test a gamemaster membership elsewhere grants nothing."""
        decision = check_character_permission(
            character,
            "gm-2",
            membership(CampaignRole.GAMEMASTER, user_id="gm-2", campaign_id="camp-2"),
        )

        assert decision.code == DecisionCode.INSUFFICIENT_PERMISSIONS

    def test_inactive_gamemaster_denied(self, character: CharacterRecord) -> None:
        """Test an inactive gamemaster membership grants nothing."""
        decision = check_character_permission(
            character,
            "gm-1",
            membership(CampaignRole.GAMEMASTER, user_id="gm-1", is_active=False),
        )

        assert decision.success is False

    def test_mapping_input(self) -> None:
        """Test plain mappings are coerced."""
        decision = check_character_permission(
            {"id": "char-9", "name": "Alexia", "player_id": "u-9", "campaign_id": "camp-1"},
            "u-9",
        )

        assert decision.success is True
        assert isinstance(decision.data["character"], CharacterRecord)

    def test_malformed_record(self) -> None:
        """Test an uncoercible record is PERMISSION_ERROR."""
        decision = check_character_permission({"id": "char-9"}, "u-9")

        assert decision.code == DecisionCode.PERMISSION_ERROR
        assert decision.error == "Character permission validation error"
