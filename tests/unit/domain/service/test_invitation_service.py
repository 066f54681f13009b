"""Unit tests for InvitationService."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from callbridge.config import AuthSettings, InvitationSettings
from callbridge.domain.error import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.domain.repository import AccountRepository, InvitationRepository
from callbridge.domain.service import (
    AccountService,
    InvitationService,
    JWTService,
    ResponderRegistration,
)
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    utc_now,
)
from callbridge.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryInvitationRepository,
)
from tests.conftest import make_account, make_invitation
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed_requester(env, monthly_invitation_limit: int = 5):
    account_repo = await env.get(AccountRepository)
    return await account_repo.save(
        make_account(
            AccountRole.REQUESTER, monthly_invitation_limit=monthly_invitation_limit
        )
    )


class TestCreateInvitation:
    """Tests for InvitationService.create."""

    @pytest.mark.asyncio
    async def test_create_issues_pending_invitation(self, unit_env):
        """A fresh invitation is pending, expires in 7 days and carries a token."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)

        # Act
        invitation = await invitation_service.create(
            requester.id, "Friend@Example.com", "Friend", "Let's talk"
        )

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.responder_email == EmailAddress("friend@example.com")
        assert invitation.expires_at - invitation.issued_at == timedelta(days=7)
        assert len(invitation.token.root) >= 32

        saved = await invitation_repo.find_by_token(invitation.token)
        assert saved is not None
        assert saved.id == invitation.id

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, unit_env):
        """Every invitation gets its own token."""
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)

        first = await invitation_service.create(requester.id, "a@example.com", "A")
        second = await invitation_service.create(requester.id, "b@example.com", "B")

        assert first.token != second.token

    @pytest.mark.asyncio
    async def test_responder_cannot_invite(self, unit_env):
        """Only requesters may issue invitations."""
        invitation_service = await unit_env.get(InvitationService)
        account_repo = await unit_env.get(AccountRepository)
        responder = await account_repo.save(make_account(AccountRole.RESPONDER))

        with pytest.raises(ValidationError):
            await invitation_service.create(responder.id, "x@example.com", "X")

    @pytest.mark.asyncio
    async def test_unknown_requester_is_rejected(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)

        with pytest.raises(ValidationError):
            await invitation_service.create(
                AccountId(uuid4()), "x@example.com", "X"
            )

    @pytest.mark.asyncio
    async def test_invalid_email_is_rejected(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)

        with pytest.raises(ValidationError, match="valid email"):
            await invitation_service.create(requester.id, "not-an-email", "X")

    @pytest.mark.asyncio
    async def test_registered_responder_email_conflicts(self, unit_env):
        """An email that already belongs to a responder cannot be invited."""
        invitation_service = await unit_env.get(InvitationService)
        account_repo = await unit_env.get(AccountRepository)
        requester = await _seed_requester(unit_env)
        await account_repo.save(
            make_account(AccountRole.RESPONDER, email="taken@example.com")
        )

        with pytest.raises(ConflictError, match="already registered"):
            await invitation_service.create(requester.id, "taken@example.com", "T")

    @pytest.mark.asyncio
    async def test_duplicate_pending_invitation_conflicts(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        await invitation_service.create(requester.id, "dup@example.com", "Dup")

        with pytest.raises(ConflictError, match="Pending invitation"):
            await invitation_service.create(requester.id, "DUP@example.com", "Dup")

    @pytest.mark.asyncio
    async def test_reinvite_after_rejection_succeeds(self, unit_env):
        """Once the earlier invitation is no longer pending, the email is free."""
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        first = await invitation_service.create(requester.id, "re@example.com", "Re")
        await invitation_service.reject(first.token.root)

        second = await invitation_service.create(requester.id, "re@example.com", "Re")

        assert second.status == InvitationStatus.PENDING
        assert second.id != first.id

    @pytest.mark.asyncio
    async def test_reinvite_after_unswept_expiry_succeeds(self, unit_env):
        """An overdue pending invitation is expired on reissue instead of conflicting."""
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        stale = await invitation_repo.save(
            make_invitation(
                requester.id,
                "old@example.com",
                issued_at=utc_now() - timedelta(days=30),
                expires_at=utc_now() - timedelta(days=23),
            )
        )

        fresh = await invitation_service.create(requester.id, "old@example.com", "Old")

        assert fresh.status == InvitationStatus.PENDING
        assert fresh.id != stale.id
        stored = await invitation_repo.find_by_id(stale.id)
        assert stored.status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_monthly_limit_is_enforced(self, unit_env):
        """The (limit+1)-th invitation of the month is refused."""
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env, monthly_invitation_limit=2)
        await invitation_service.create(requester.id, "one@example.com", "One")
        await invitation_service.create(requester.id, "two@example.com", "Two")

        with pytest.raises(QuotaExceededError):
            await invitation_service.create(requester.id, "three@example.com", "3")

    @pytest.mark.asyncio
    async def test_rejected_invitations_do_not_count_towards_limit(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env, monthly_invitation_limit=1)
        first = await invitation_service.create(requester.id, "one@example.com", "1")
        await invitation_service.reject(first.token.root)

        second = await invitation_service.create(requester.id, "two@example.com", "2")

        assert second.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_previous_month_does_not_count_towards_limit(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env, monthly_invitation_limit=1)
        await invitation_repo.save(
            make_invitation(
                requester.id,
                "old@example.com",
                issued_at=utc_now() - timedelta(days=40),
            )
        )

        invitation = await invitation_service.create(
            requester.id, "new@example.com", "New"
        )

        assert invitation.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_zero_limit_refuses_everything(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env, monthly_invitation_limit=0)

        with pytest.raises(QuotaExceededError):
            await invitation_service.create(requester.id, "x@example.com", "X")

    @pytest.mark.asyncio
    async def test_message_longer_than_500_chars_is_rejected(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)

        with pytest.raises(ValidationError):
            await invitation_service.create(
                requester.id, "x@example.com", "X", "m" * 501
            )


class TestGetByToken:
    """Tests for InvitationService.get_by_token."""

    @pytest.mark.asyncio
    async def test_unknown_token_raises_not_found(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)

        with pytest.raises(NotFoundError):
            await invitation_service.get_by_token("does-not-exist")

    @pytest.mark.asyncio
    async def test_reading_an_expired_invitation_does_not_change_it(self, unit_env):
        """Lookups are side-effect free, even past expiry."""
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        stale = await invitation_repo.save(
            make_invitation(
                requester.id,
                issued_at=utc_now() - timedelta(days=8),
                expires_at=utc_now() - timedelta(days=1),
            )
        )

        found = await invitation_service.get_by_token(stale.token.root)

        assert found.status == InvitationStatus.PENDING
        stored = await invitation_repo.find_by_id(stale.id)
        assert stored.status == InvitationStatus.PENDING


class TestAcceptInvitation:
    """Tests for InvitationService.accept."""

    @pytest.mark.asyncio
    async def test_accept_creates_responder_and_links_invitation(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        jwt_service = await unit_env.get(JWTService)
        requester = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "new@example.com", "New Person"
        )

        # Act
        result = await invitation_service.accept(
            invitation.token.root,
            ResponderRegistration(name="New Person", company="Acme"),
        )

        # Assert
        assert result.account.role == AccountRole.RESPONDER
        assert result.account.email == EmailAddress("new@example.com")
        assert result.account.company == "Acme"
        assert result.invitation.status == InvitationStatus.ACCEPTED
        assert result.invitation.accepted_by_account_id == result.account.id
        assert result.invitation.accepted_at is not None

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED

        payload = jwt_service.verify_token(result.access_token)
        assert payload.account_id == str(result.account.id)
        assert payload.role == "responder"

    @pytest.mark.asyncio
    async def test_token_can_only_be_used_once(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "once@example.com", "Once"
        )
        await invitation_service.accept(
            invitation.token.root, ResponderRegistration(name="Once")
        )

        with pytest.raises(NotFoundError):
            await invitation_service.accept(
                invitation.token.root, ResponderRegistration(name="Twice")
            )
        with pytest.raises(NotFoundError):
            await invitation_service.reject(invitation.token.root)

    @pytest.mark.asyncio
    async def test_expired_invitation_is_marked_expired(self, unit_env):
        """Using a token past its expiry fails and persists EXPIRED."""
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        account_repo = await unit_env.get(AccountRepository)
        requester = await _seed_requester(unit_env)
        stale = await invitation_repo.save(
            make_invitation(
                requester.id,
                "late@example.com",
                issued_at=utc_now() - timedelta(days=8),
                expires_at=utc_now() - timedelta(seconds=1),
            )
        )

        with pytest.raises(ExpiredError):
            await invitation_service.accept(
                stale.token.root, ResponderRegistration(name="Late")
            )

        stored = await invitation_repo.find_by_id(stale.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert await account_repo.find_by_email(EmailAddress("late@example.com")) is None

    @pytest.mark.asyncio
    async def test_existing_account_email_conflicts(self, unit_env):
        """Acceptance fails if any account already uses the invited email."""
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        account_repo = await unit_env.get(AccountRepository)
        requester = await _seed_requester(unit_env)
        await account_repo.save(
            make_account(AccountRole.REQUESTER, email="both@example.com")
        )
        invitation = await invitation_repo.save(
            make_invitation(requester.id, "both@example.com")
        )

        with pytest.raises(ConflictError):
            await invitation_service.accept(
                invitation.token.root, ResponderRegistration(name="Both")
            )

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_email_taken_during_acceptance_reverts_invitation(self):
        """If the account insert collides, the invitation goes back to pending."""

        class CollidingAccountRepository(InMemoryAccountRepository):
            async def save(self, account):
                if account.role == AccountRole.RESPONDER:
                    raise IntegrityError("Duplicate email", None, Exception())
                return await super().save(account)

        account_repo = CollidingAccountRepository()
        invitation_repo = InMemoryInvitationRepository()
        invitation_service = InvitationService(
            invitation_repository=invitation_repo,
            account_service=AccountService(account_repo),
            jwt_service=JWTService(AuthSettings()),
            settings=InvitationSettings(),
        )
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        invitation = await invitation_repo.save(
            make_invitation(requester.id, "race@example.com")
        )

        with pytest.raises(ConflictError):
            await invitation_service.accept(
                invitation.token.root, ResponderRegistration(name="Race")
            )

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING
        assert stored.accepted_at is None
        assert stored.accepted_by_account_id is None
        assert await account_repo.find_by_email(EmailAddress("race@example.com")) is None

    @pytest.mark.asyncio
    async def test_unknown_token_raises_not_found(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)

        with pytest.raises(NotFoundError):
            await invitation_service.accept(
                "unknown-token", ResponderRegistration(name="Nobody")
            )


class TestRejectInvitation:
    """Tests for InvitationService.reject."""

    @pytest.mark.asyncio
    async def test_reject_sets_status_and_timestamp(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "no@example.com", "No"
        )

        rejected = await invitation_service.reject(invitation.token.root)

        assert rejected.status == InvitationStatus.REJECTED
        assert rejected.rejected_at is not None

    @pytest.mark.asyncio
    async def test_reject_after_expiry_raises_expired(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        stale = await invitation_repo.save(
            make_invitation(
                requester.id,
                issued_at=utc_now() - timedelta(days=10),
                expires_at=utc_now() - timedelta(days=3),
            )
        )

        with pytest.raises(ExpiredError):
            await invitation_service.reject(stale.token.root)

        stored = await invitation_repo.find_by_id(stale.id)
        assert stored.status == InvitationStatus.EXPIRED


class TestCancelInvitation:
    """Tests for InvitationService.cancel."""

    @pytest.mark.asyncio
    async def test_issuer_can_cancel_pending_invitation(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "c@example.com", "C"
        )

        cancelled = await invitation_service.cancel(invitation.id, requester.id)

        assert cancelled.status == InvitationStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_other_requester_cannot_cancel(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        other = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "c@example.com", "C"
        )

        with pytest.raises(NotFoundError):
            await invitation_service.cancel(invitation.id, other.id)

    @pytest.mark.asyncio
    async def test_cannot_cancel_twice(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        invitation = await invitation_service.create(
            requester.id, "c@example.com", "C"
        )
        await invitation_service.cancel(invitation.id, requester.id)

        with pytest.raises(NotFoundError):
            await invitation_service.cancel(invitation.id, requester.id)

    @pytest.mark.asyncio
    async def test_unknown_invitation_raises_not_found(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)

        with pytest.raises(NotFoundError):
            await invitation_service.cancel(InvitationId(uuid4()), requester.id)


class TestListInvitations:
    """Tests for the listing operations."""

    @pytest.mark.asyncio
    async def test_list_for_requester_is_paginated_newest_first(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        now = utc_now()
        for days_ago in (3, 1, 2):
            await invitation_repo.save(
                make_invitation(
                    requester.id,
                    f"d{days_ago}@example.com",
                    issued_at=now - timedelta(days=days_ago),
                )
            )

        page_one, pagination = await invitation_service.list_for_requester(
            requester.id, page=1, limit=2
        )
        page_two, _ = await invitation_service.list_for_requester(
            requester.id, page=2, limit=2
        )

        assert [i.responder_email.root for i in page_one] == [
            "d1@example.com",
            "d2@example.com",
        ]
        assert [i.responder_email.root for i in page_two] == ["d3@example.com"]
        assert pagination.total_items == 3
        assert pagination.total_pages == 2
        assert pagination.has_next_page is True
        assert pagination.has_prev_page is False

    @pytest.mark.asyncio
    async def test_active_only_skips_expired_pending(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        live = await invitation_repo.save(
            make_invitation(requester.id, "live@example.com")
        )
        await invitation_repo.save(
            make_invitation(
                requester.id,
                "stale@example.com",
                issued_at=utc_now() - timedelta(days=9),
                expires_at=utc_now() - timedelta(days=2),
            )
        )

        invitations, pagination = await invitation_service.list_for_requester(
            requester.id, active_only=True
        )

        assert [i.id for i in invitations] == [live.id]
        assert pagination.total_items == 1

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        keep = await invitation_service.create(requester.id, "k@example.com", "K")
        drop = await invitation_service.create(requester.id, "d@example.com", "D")
        await invitation_service.reject(drop.token.root)

        invitations, _ = await invitation_service.list_for_requester(
            requester.id, status=InvitationStatus.PENDING
        )

        assert [i.id for i in invitations] == [keep.id]

    @pytest.mark.asyncio
    async def test_list_all_searches_email_and_name(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        await invitation_service.create(requester.id, "ada@example.com", "Ada L")
        await invitation_service.create(requester.id, "bob@example.com", "Lovelace")
        await invitation_service.create(requester.id, "eve@example.com", "Eve")

        by_email, _ = await invitation_service.list_all(search="ADA")
        by_name, _ = await invitation_service.list_all(search="lovelace")
        everything, pagination = await invitation_service.list_all()

        assert [i.responder_email.root for i in by_email] == ["ada@example.com"]
        assert [i.responder_email.root for i in by_name] == ["bob@example.com"]
        assert pagination.total_items == 3
        assert len(everything) == 3


class TestExpireOverdue:
    """Tests for the expiry sweep."""

    @pytest.mark.asyncio
    async def test_sweep_expires_only_overdue_pending(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await _seed_requester(unit_env)
        past = utc_now() - timedelta(days=1)
        overdue = await invitation_repo.save(
            make_invitation(
                requester.id,
                "o@example.com",
                issued_at=past - timedelta(days=7),
                expires_at=past,
            )
        )
        accepted = await invitation_repo.save(
            make_invitation(
                requester.id,
                "a@example.com",
                status=InvitationStatus.ACCEPTED,
                issued_at=past - timedelta(days=7),
                expires_at=past,
            )
        )
        live = await invitation_repo.save(
            make_invitation(requester.id, "l@example.com")
        )

        count = await invitation_service.expire_overdue()

        assert count == 1
        assert (await invitation_repo.find_by_id(overdue.id)).status == (
            InvitationStatus.EXPIRED
        )
        assert (await invitation_repo.find_by_id(accepted.id)).status == (
            InvitationStatus.ACCEPTED
        )
        assert (await invitation_repo.find_by_id(live.id)).status == (
            InvitationStatus.PENDING
        )


class TestInvitationStats:
    """Tests for requester and platform invitation statistics."""

    @pytest.mark.asyncio
    async def test_stats_counts_and_acceptance_rate(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)
        accepted = await invitation_service.create(requester.id, "a@example.com", "A")
        await invitation_service.accept(
            accepted.token.root, ResponderRegistration(name="A")
        )
        rejected = await invitation_service.create(requester.id, "r@example.com", "R")
        await invitation_service.reject(rejected.token.root)
        await invitation_service.create(requester.id, "p@example.com", "P")

        stats = await invitation_service.stats(requester.id)

        assert stats.total == 3
        assert stats.accepted == 1
        assert stats.rejected == 1
        assert stats.pending == 1
        assert stats.monthly == 3
        assert stats.acceptance_rate == 33.3

    @pytest.mark.asyncio
    async def test_stats_without_invitations_is_zero(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env)

        stats = await invitation_service.stats(requester.id)

        assert stats.total == 0
        assert stats.acceptance_rate == 0.0

    @pytest.mark.asyncio
    async def test_remaining_monthly_quota(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        requester = await _seed_requester(unit_env, monthly_invitation_limit=3)
        await invitation_service.create(requester.id, "a@example.com", "A")

        remaining = await invitation_service.remaining_monthly_quota(requester)

        assert remaining == 2


class TestInjectedClock:
    """The service reads time only through its clock."""

    @pytest.mark.asyncio
    async def test_invitation_expires_when_clock_passes_window(self):
        # Arrange
        account_repo = InMemoryAccountRepository()
        invitation_repo = InMemoryInvitationRepository()
        now = utc_now()
        current = {"now": now}

        def clock():
            return current["now"]

        account_service = AccountService(account_repo, clock=clock)
        invitation_service = InvitationService(
            invitation_repository=invitation_repo,
            account_service=account_service,
            jwt_service=JWTService(AuthSettings()),
            settings=InvitationSettings(expiry_days=7),
            clock=clock,
        )
        requester = await account_repo.save(
            make_account(AccountRole.REQUESTER, monthly_invitation_limit=1)
        )
        invitation = await invitation_service.create(
            requester.id, "clock@example.com", "Clock"
        )

        # Act
        current["now"] = now + timedelta(days=7, seconds=1)

        # Assert
        with pytest.raises(ExpiredError):
            await invitation_service.accept(
                invitation.token.root, ResponderRegistration(name="Clock")
            )
