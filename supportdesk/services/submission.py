"""
Customer submission wizard: pick a business, fill the form, done.

The wizard owns no storage. It is driven by two callables so it can be
bound to real services or to fakes:

    lookup(business_id) -> Business          (may raise NotFoundError)
    submit(business_id, submission, attachment) -> Ticket

This is the in-process API for Python callers. HTTP clients walk the same
steps with ``GET /businesses/{id}`` and ``POST /businesses/{id}/tickets``.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from supportdesk.core.errors import AppError, ValidationError
from supportdesk.schemas.ticket import TicketSubmission
from supportdesk.services.tickets import Attachment

logger = logging.getLogger(__name__)

FORM_FIELDS = ("customer_name", "customer_phone", "customer_email", "category", "description")


class WizardStep(str, Enum):
    SELECTING_BUSINESS = "selecting_business"
    FILLING_FORM = "filling_form"
    SUBMITTED = "submitted"


class WizardStateError(RuntimeError):
    pass


def _empty_form() -> dict:
    return {field: "" for field in FORM_FIELDS}


def build_submission(fields: dict) -> TicketSubmission:
    """Turn raw form values into a ``TicketSubmission``, raising the app's ValidationError."""
    try:
        return TicketSubmission(**fields)
    except PydanticValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(f"Invalid fields: {', '.join(invalid)}") from e


class SubmissionWizard:
    def __init__(self, lookup: Callable, submit: Callable):
        self._lookup = lookup
        self._submit = submit
        self.step = WizardStep.SELECTING_BUSINESS
        self.business = None
        self.fields = _empty_form()
        self.attachment: Optional[Attachment] = None
        self.ticket = None
        self.error: Optional[str] = None

    def _require(self, step: WizardStep) -> None:
        if self.step != step:
            raise WizardStateError(f"Not allowed while {self.step.value}")

    def select_business(self, business_id: int) -> bool:
        self._require(WizardStep.SELECTING_BUSINESS)
        try:
            self.business = self._lookup(business_id)
        except AppError as e:
            self.error = e.message
            return False
        self.error = None
        self.step = WizardStep.FILLING_FORM
        return True

    def update(self, **values) -> None:
        self._require(WizardStep.FILLING_FORM)
        unknown = set(values) - set(FORM_FIELDS)
        if unknown:
            raise WizardStateError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.fields.update(values)

    def attach(self, attachment: Attachment) -> None:
        self._require(WizardStep.FILLING_FORM)
        self.attachment = attachment

    def remove_attachment(self) -> None:
        self._require(WizardStep.FILLING_FORM)
        self.attachment = None

    def back(self) -> None:
        """Return to business selection, discarding everything typed so far."""
        self._require(WizardStep.FILLING_FORM)
        self.step = WizardStep.SELECTING_BUSINESS
        self.business = None
        self.fields = _empty_form()
        self.attachment = None
        self.error = None

    def submit(self) -> bool:
        """
        Try to create the ticket. On failure the wizard stays on the form with
        every field intact and ``error`` set; nothing is raised.
        """
        self._require(WizardStep.FILLING_FORM)
        try:
            submission = build_submission(self.fields)
            self.ticket = self._submit(self.business.id, submission, self.attachment)
        except AppError as e:
            logger.info("Ticket submission for business %s failed: %s", self.business.id, e.message)
            self.error = e.message
            return False
        self.error = None
        self.step = WizardStep.SUBMITTED
        return True
