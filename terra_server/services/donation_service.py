# terra_server/services/donation_service.py

from terra_server.core.exceptions import BadRequestError, NotFoundError
from terra_server.core.logging import get_logger
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import ensure_uuid, new_id, utcnow
from terra_server.entities.statuses import DonationStatus
from terra_server.infrastructure.database.models.donation_model import DonationModel
from terra_server.repositories.donation_repository import DonationRepository
from terra_server.repositories.program_repository import ProgramRepository

logger = get_logger(__name__)

_STATUSES = {s.value for s in DonationStatus}


class DonationService:
    def __init__(self, donation_repository: DonationRepository, program_repository: ProgramRepository) -> None:
        self._donation_repository = donation_repository
        self._program_repository = program_repository

    @wraps_storage_errors("create donation")
    def create_donation(
        self,
        *,
        user_id: str,
        program_id: str,
        amount: float,
        payment_method: str,
        proof_image: str | None = None,
    ) -> DonationModel:
        program_id = ensure_uuid(program_id, label="program")
        if amount is None or amount <= 0:
            raise BadRequestError("Amount must be greater than 0")
        payment_method = (payment_method or "").strip()
        if not payment_method:
            raise BadRequestError("Payment method cannot be empty")

        if self._program_repository.get_by_id(program_id) is None:
            raise NotFoundError("Program not found")

        now = utcnow()
        model = DonationModel(
            id=new_id(),
            user_id=user_id,
            program_id=program_id,
            amount=amount,
            payment_method=payment_method,
            status=DonationStatus.PENDING.value,
            proof_image=proof_image,
            created_at=now,
            updated_at=now,
        )
        self._donation_repository.add(model)
        logger.info("donation_created", donation_id=model.id, program_id=program_id, user_id=user_id)
        return model

    @wraps_storage_errors("list donations")
    def my_donations(self, user_id: str) -> list[DonationModel]:
        return self._donation_repository.list_by_user(user_id)

    @wraps_storage_errors("list donations")
    def list_donations(self) -> list[DonationModel]:
        return self._donation_repository.list_all()

    @wraps_storage_errors("get donation")
    def get_donation(self, donation_id: str) -> DonationModel:
        donation = self._donation_repository.get_by_id(ensure_uuid(donation_id, label="donation"))
        if donation is None:
            raise NotFoundError("Donation not found")
        return donation

    @wraps_storage_errors("update donation status")
    def update_status(self, donation_id: str, *, status: str) -> DonationModel:
        if status not in _STATUSES:
            raise BadRequestError("Status must be one of: pending, paid, failed")

        donation = self.get_donation(donation_id)
        donation.status = status
        donation.updated_at = utcnow()
        self._donation_repository.flush()
        logger.info("donation_status_updated", donation_id=donation.id, status=status)
        return donation
