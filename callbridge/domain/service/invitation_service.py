"""Invitation domain service (the invitation ledger)."""

import secrets
from dataclasses import dataclass
from datetime import timedelta
from uuid import uuid4

import logfire
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from callbridge.config import InvitationSettings
from callbridge.domain.error import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.domain.model import Account, Invitation
from callbridge.domain.model.invitation import is_expired
from callbridge.domain.model.stats import InvitationStats, percentage
from callbridge.domain.repository import InvitationRepository
from callbridge.domain.value import (
    AccountId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Pagination,
    calculate_pagination,
    start_of_month,
)
from callbridge.domain.value.common import ValueObject

from .account_service import AccountService
from .base import Clock, Service
from .jwt_service import JWTService


class ResponderRegistration(ValueObject):
    """Profile data supplied by the invitee when accepting."""

    name: str = Field(min_length=1, max_length=50)
    company: str | None = None
    job_title: str | None = None


@dataclass
class AcceptedInvitation:
    """Result of a successful acceptance.

    ``access_token`` is the credential artifact the external identity
    layer turns into a session.
    """

    account: Account
    invitation: Invitation
    access_token: str


class InvitationService(Service):
    """Issues, reads and terminates invitation tokens.

    State machine: pending -> accepted | rejected | expired | cancelled.
    Every transition is a compare-and-set on the pending status, so a
    token can be consumed at most once.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        account_service: AccountService,
        jwt_service: JWTService,
        settings: InvitationSettings,
        clock: Clock | None = None,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            account_service: Account domain service
            jwt_service: JWT domain service
            settings: Invitation settings
            clock: Optional time source
        """
        super().__init__(clock)
        self.invitation_repository = invitation_repository
        self.account_service = account_service
        self.jwt_service = jwt_service
        self.settings = settings

    async def create(
        self,
        requester_id: AccountId,
        responder_email: str,
        responder_name: str,
        message: str | None = None,
    ) -> Invitation:
        """Issue a new invitation.

        Args:
            requester_id: Requester issuing the invitation
            responder_email: Invitee email
            responder_name: Invitee display name
            message: Optional personal message (max 500 chars)

        Returns:
            Created invitation, token included

        Raises:
            ValidationError: If the caller is not a requester or input is malformed
            ConflictError: If the email belongs to a responder, or a pending
                invitation from this requester already exists for it
            QuotaExceededError: If the monthly invitation limit is reached
        """
        with logfire.span(
            "invitation_service.create",
            requester_id=str(requester_id),
            responder_email=responder_email,
        ):
            requester = await self.account_service.find_by_id(requester_id)
            if not requester or not requester.is_requester:
                logfire.warn("Invitation by non-requester", account_id=str(requester_id))
                raise ValidationError("Invalid requester")

            try:
                email = EmailAddress(responder_email)
            except PydanticValidationError as e:
                raise ValidationError("Please enter a valid email") from e

            existing = await self.account_service.find_by_email(email)
            if existing and existing.is_responder:
                logfire.warn("Responder already registered", email=email.root)
                raise ConflictError("Responder already registered")

            now = self.now()
            pending = await self.invitation_repository.find_pending(requester_id, email)
            if pending and is_expired(pending, now):
                # Overdue but never swept; free the slot for a fresh invitation
                await self.invitation_repository.save_if_status(
                    pending.model_copy(update={"status": InvitationStatus.EXPIRED}),
                    InvitationStatus.PENDING,
                )
                logfire.info(
                    "Overdue invitation expired on reissue",
                    invitation_id=str(pending.id),
                )
            elif pending:
                logfire.warn(
                    "Pending invitation already exists",
                    requester_id=str(requester_id),
                    email=email.root,
                )
                raise ConflictError("Pending invitation already exists for this email")

            used = await self.invitation_repository.count_by_requester(
                requester_id,
                issued_since=start_of_month(now),
                exclude_status=InvitationStatus.REJECTED,
            )
            if used >= requester.monthly_invitation_limit:
                logfire.warn(
                    "Monthly invitation limit reached",
                    requester_id=str(requester_id),
                    used=used,
                    limit=requester.monthly_invitation_limit,
                )
                raise QuotaExceededError("Monthly invitation limit reached")

            try:
                invitation = Invitation(
                    id=InvitationId(uuid4()),
                    requester_id=requester_id,
                    responder_email=email,
                    responder_name=responder_name,
                    message=message,
                    token=self._generate_token(),
                    status=InvitationStatus.PENDING,
                    issued_at=now,
                    expires_at=now + timedelta(days=self.settings.expiry_days),
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            try:
                saved = await self.invitation_repository.save(invitation)
            except IntegrityError:
                logfire.warn("Duplicate invitation on save", email=email.root)
                raise ConflictError("Pending invitation already exists for this email")

            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                requester_id=str(requester_id),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_by_token(self, token: str) -> Invitation:
        """Look up an invitation by token.

        Reading never changes state, even for an invitation that is
        already past its expiry.

        Raises:
            NotFoundError: If no invitation has this token
        """
        invitation_token = self._parse_token(token)
        with logfire.span(
            "invitation_service.get_by_token", token=invitation_token.masked()
        ):
            invitation = await self.invitation_repository.find_by_token(
                invitation_token
            )
            if not invitation:
                logfire.warn("Invitation not found", token=invitation_token.masked())
                raise NotFoundError("Invitation", invitation_token.masked())
            return invitation

    async def accept(
        self, token: str, registration: ResponderRegistration
    ) -> AcceptedInvitation:
        """Accept an invitation and create the responder account.

        Args:
            token: Invitation token
            registration: Invitee profile data

        Returns:
            New account, accepted invitation and access token

        Raises:
            NotFoundError: If the token is unknown or no longer pending
            ExpiredError: If the invitation expired (it is marked expired)
            ConflictError: If an account already exists for the email
        """
        invitation_token = self._parse_token(token)
        with logfire.span(
            "invitation_service.accept", token=invitation_token.masked()
        ):
            invitation = await self._get_pending(invitation_token)
            now = self.now()
            await self._expire_if_overdue(invitation)

            if await self.account_service.find_by_email(invitation.responder_email):
                logfire.warn(
                    "Invitation email already registered",
                    invitation_id=str(invitation.id),
                )
                raise ConflictError(
                    f"An account already exists for {invitation.responder_email}"
                )

            account_id = AccountId(uuid4())
            accepted = invitation.model_copy(
                update={
                    "status": InvitationStatus.ACCEPTED,
                    "accepted_at": now,
                    "accepted_by_account_id": account_id,
                }
            )
            if not await self.invitation_repository.save_if_status(
                accepted, InvitationStatus.PENDING
            ):
                logfire.warn(
                    "Invitation consumed concurrently", invitation_id=str(invitation.id)
                )
                raise NotFoundError("Invitation", invitation_token.masked())

            try:
                account = await self.account_service.create_responder(
                    email=invitation.responder_email,
                    name=registration.name,
                    company=registration.company,
                    job_title=registration.job_title,
                    account_id=account_id,
                )
            except (ConflictError, ValidationError):
                # No account behind the acceptance; hand the token back
                await self.invitation_repository.save_if_status(
                    invitation, InvitationStatus.ACCEPTED
                )
                logfire.warn(
                    "Acceptance reverted", invitation_id=str(invitation.id)
                )
                raise
            access_token = self.jwt_service.create_token(account)

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                account_id=str(account.id),
            )
            return AcceptedInvitation(
                account=account, invitation=accepted, access_token=access_token
            )

    async def reject(self, token: str) -> Invitation:
        """Reject an invitation.

        Raises:
            NotFoundError: If the token is unknown or no longer pending
            ExpiredError: If the invitation expired (it is marked expired)
        """
        invitation_token = self._parse_token(token)
        with logfire.span(
            "invitation_service.reject", token=invitation_token.masked()
        ):
            invitation = await self._get_pending(invitation_token)
            await self._expire_if_overdue(invitation)

            rejected = invitation.model_copy(
                update={
                    "status": InvitationStatus.REJECTED,
                    "rejected_at": self.now(),
                }
            )
            if not await self.invitation_repository.save_if_status(
                rejected, InvitationStatus.PENDING
            ):
                raise NotFoundError("Invitation", invitation_token.masked())

            logfire.info("Invitation rejected", invitation_id=str(invitation.id))
            return rejected

    async def cancel(
        self, invitation_id: InvitationId, requester_id: AccountId
    ) -> Invitation:
        """Cancel a pending invitation on behalf of its issuer.

        Raises:
            NotFoundError: If the invitation does not exist, was issued by
                someone else, or is no longer pending
        """
        with logfire.span(
            "invitation_service.cancel",
            invitation_id=str(invitation_id),
            requester_id=str(requester_id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if (
                not invitation
                or invitation.requester_id != requester_id
                or invitation.status != InvitationStatus.PENDING
            ):
                logfire.warn(
                    "Invitation cannot be cancelled", invitation_id=str(invitation_id)
                )
                raise NotFoundError("Invitation", str(invitation_id))

            cancelled = invitation.model_copy(
                update={"status": InvitationStatus.CANCELLED}
            )
            if not await self.invitation_repository.save_if_status(
                cancelled, InvitationStatus.PENDING
            ):
                raise NotFoundError("Invitation", str(invitation_id))

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            return cancelled

    async def list_for_requester(
        self,
        requester_id: AccountId,
        page: int = 1,
        limit: int = 10,
        status: InvitationStatus | None = None,
        active_only: bool = False,
    ) -> tuple[list[Invitation], Pagination]:
        """List invitations issued by a requester, newest first.

        Args:
            requester_id: Issuing requester
            page: 1-based page number
            limit: Page size
            status: Optional status filter (ignored when active_only)
            active_only: Only pending invitations that have not expired

        Returns:
            Invitations on the page and pagination metadata
        """
        with logfire.span(
            "invitation_service.list_for_requester",
            requester_id=str(requester_id),
            page=page,
            limit=limit,
            active_only=active_only,
        ):
            now = self.now()
            if active_only:
                total = await self.invitation_repository.count_active(requester_id, now)
            else:
                total = await self.invitation_repository.count_by_requester(
                    requester_id, status=status
                )
            pagination = calculate_pagination(page, limit, total)

            if active_only:
                invitations = await self.invitation_repository.find_active(
                    requester_id, now, limit=limit, offset=pagination.offset
                )
            else:
                invitations = await self.invitation_repository.find_by_requester(
                    requester_id, status=status, limit=limit, offset=pagination.offset
                )
            logfire.info(
                "Invitations listed",
                requester_id=str(requester_id),
                count=len(invitations),
                total=total,
            )
            return invitations, pagination

    async def list_all(
        self,
        page: int = 1,
        limit: int = 10,
        status: InvitationStatus | None = None,
        search: str | None = None,
    ) -> tuple[list[Invitation], Pagination]:
        """List invitations across the platform, newest first."""
        with logfire.span(
            "invitation_service.list_all", page=page, limit=limit, search=search
        ):
            total = await self.invitation_repository.count_all(status, search)
            pagination = calculate_pagination(page, limit, total)
            invitations = await self.invitation_repository.find_all(
                status=status, search=search, limit=limit, offset=pagination.offset
            )
            return invitations, pagination

    async def expire_overdue(self) -> int:
        """Move every pending invitation past its expiry to EXPIRED.

        Returns:
            Number of invitations expired by this sweep
        """
        with logfire.span("invitation_service.expire_overdue"):
            now = self.now()
            overdue = await self.invitation_repository.find_pending_expired(now)
            expired = 0
            for invitation in overdue:
                if await self.invitation_repository.save_if_status(
                    invitation.model_copy(update={"status": InvitationStatus.EXPIRED}),
                    InvitationStatus.PENDING,
                ):
                    expired += 1
            logfire.info("Overdue invitations expired", count=expired)
            return expired

    async def stats(self, requester_id: AccountId) -> InvitationStats:
        """Invitation statistics for one requester."""
        with logfire.span("invitation_service.stats", requester_id=str(requester_id)):
            by_status = await self.invitation_repository.count_by_status(requester_id)
            monthly = await self.invitation_repository.count_by_requester(
                requester_id, issued_since=start_of_month(self.now())
            )
            return self._build_stats(by_status, monthly)

    async def platform_stats(self) -> InvitationStats:
        """Invitation statistics across all requesters."""
        with logfire.span("invitation_service.platform_stats"):
            by_status = await self.invitation_repository.count_by_status()
            monthly = await self.invitation_repository.count_all(
                issued_since=start_of_month(self.now())
            )
            return self._build_stats(by_status, monthly)

    async def remaining_monthly_quota(self, requester: Account) -> int:
        """Invitations the requester may still issue this calendar month."""
        used = await self.invitation_repository.count_by_requester(
            requester.id,
            issued_since=start_of_month(self.now()),
            exclude_status=InvitationStatus.REJECTED,
        )
        return max(0, requester.monthly_invitation_limit - used)

    async def _get_pending(self, token: InvitationToken) -> Invitation:
        invitation = await self.invitation_repository.find_by_token(token)
        if not invitation or invitation.status != InvitationStatus.PENDING:
            logfire.warn("No pending invitation for token", token=token.masked())
            raise NotFoundError("Invitation", token.masked())
        return invitation

    async def _expire_if_overdue(self, invitation: Invitation) -> None:
        """Persist EXPIRED and raise if the invitation is past its window.

        The status change stays even though the calling operation fails.
        """
        if not is_expired(invitation, self.now()):
            return
        await self.invitation_repository.save_if_status(
            invitation.model_copy(update={"status": InvitationStatus.EXPIRED}),
            InvitationStatus.PENDING,
        )
        logfire.warn("Invitation expired on use", invitation_id=str(invitation.id))
        raise ExpiredError("Invitation has expired")

    def _generate_token(self) -> InvitationToken:
        return InvitationToken(secrets.token_urlsafe(self.settings.token_bytes))

    @staticmethod
    def _parse_token(token: str) -> InvitationToken:
        try:
            return InvitationToken(token)
        except PydanticValidationError as e:
            raise NotFoundError("Invitation", token[:8] + "...") from e

    @staticmethod
    def _build_stats(
        by_status: dict[InvitationStatus, int], monthly: int
    ) -> InvitationStats:
        total = sum(by_status.values())
        accepted = by_status.get(InvitationStatus.ACCEPTED, 0)
        return InvitationStats(
            total=total,
            pending=by_status.get(InvitationStatus.PENDING, 0),
            accepted=accepted,
            rejected=by_status.get(InvitationStatus.REJECTED, 0),
            expired=by_status.get(InvitationStatus.EXPIRED, 0),
            cancelled=by_status.get(InvitationStatus.CANCELLED, 0),
            monthly=monthly,
            acceptance_rate=percentage(accepted, total),
        )
