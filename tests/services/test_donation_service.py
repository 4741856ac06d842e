"""Tests for donations."""

import pytest

from conftest import add_program, add_user
from terra_server.core.exceptions import BadRequestError, NotFoundError
from terra_server.core.utils import new_id
from terra_server.entities.statuses import DonationStatus
from terra_server.repositories.donation_repository import DonationRepository
from terra_server.repositories.program_repository import ProgramRepository
from terra_server.services.donation_service import DonationService


@pytest.fixture
def service(session):
    return DonationService(DonationRepository(session), ProgramRepository(session))


@pytest.fixture
def donor(session):
    return add_user(session, email="donor@example.com")


@pytest.fixture
def program(session):
    return add_program(session)


class TestCreate:
    def test_starts_pending(self, service, donor, program):
        donation = service.create_donation(
            user_id=donor.id, program_id=program.id, amount=150.5, payment_method="bank_transfer"
        )
        assert donation.status == DonationStatus.PENDING.value
        assert donation.amount == 150.5
        assert [d.id for d in service.my_donations(donor.id)] == [donation.id]

    def test_unknown_program(self, service, donor):
        with pytest.raises(NotFoundError):
            service.create_donation(user_id=donor.id, program_id=new_id(), amount=10, payment_method="cash")

    def test_malformed_program_id(self, service, donor):
        with pytest.raises(BadRequestError):
            service.create_donation(user_id=donor.id, program_id="abc", amount=10, payment_method="cash")

    @pytest.mark.parametrize("amount", [0, -5])
    def test_amount_must_be_positive(self, service, donor, program, amount):
        with pytest.raises(BadRequestError):
            service.create_donation(user_id=donor.id, program_id=program.id, amount=amount, payment_method="cash")

    def test_payment_method_required(self, service, donor, program):
        with pytest.raises(BadRequestError):
            service.create_donation(user_id=donor.id, program_id=program.id, amount=10, payment_method="  ")


class TestStatus:
    def test_transitions(self, service, donor, program):
        donation = service.create_donation(user_id=donor.id, program_id=program.id, amount=10, payment_method="cash")

        assert service.update_status(donation.id, status="paid").status == "paid"
        assert service.update_status(donation.id, status="failed").status == "failed"
        assert service.get_donation(donation.id).status == "failed"

    def test_invalid_status(self, service, donor, program):
        donation = service.create_donation(user_id=donor.id, program_id=program.id, amount=10, payment_method="cash")
        with pytest.raises(BadRequestError):
            service.update_status(donation.id, status="refunded")

    def test_unknown_donation(self, service):
        with pytest.raises(NotFoundError):
            service.get_donation(new_id())
