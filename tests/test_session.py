"""
Session orchestrator tests.

Each test scripts the user's answers in prompt order and checks the
returned ``RoundOutcome`` plus the platform state left behind.
"""

from ridematch.domain.entities import ConfirmedRide, Offer
from ridematch.domain.enums import Role
from ridematch.session.schemas import RoundStatus


class TestRiderRound:
    def test_accept(self, seeded, scripted):
        session, prompt = scripted(" R ", "no", "bob", "pw", "Downtown", "0", "yes")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.ACCEPTED
        assert outcome.role is Role.RIDER
        assert outcome.counterpart == "alice"
        assert outcome.ride.driver_username == "alice"
        assert outcome.ride.destination == "Downtown"
        assert seeded.confirmed_ride("bob") == ConfirmedRide("alice", "Downtown")
        assert "0: alice" in prompt.shown
        assert prompt.shown[-1] == "Ride request accepted. Enjoy your ride!"

    def test_reject(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "pw", "Downtown", "0", "nope")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.REJECTED
        assert outcome.ride is None
        assert seeded.confirmed_ride("bob") is None
        assert seeded.pending_requests("alice") == []

    def test_no_matching_drivers(self, seeded, scripted):
        session, prompt = scripted("r", "no", "bob", "pw", "Uptown")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.NO_MATCHING_DRIVERS
        assert "No available drivers for 'Uptown'" in outcome.message
        assert seeded.requested_destination("bob") == "Uptown"
        assert not prompt.answers

    def test_destination_is_matched_as_entered(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "pw", "downtown")
        assert session.run_round().status == RoundStatus.NO_MATCHING_DRIVERS

    def test_out_of_bounds_index(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "pw", "Downtown", "1")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.INVALID_INDEX
        assert seeded.pending_requests("alice") == []

    def test_non_numeric_index(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "pw", "Downtown", "first")
        assert session.run_round().status == RoundStatus.INVALID_INDEX

    def test_negative_index(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "pw", "Downtown", "-1")
        assert session.run_round().status == RoundStatus.INVALID_INDEX


class TestDriverRound:
    def test_accept_pending_request(self, seeded, scripted):
        seeded.propose("bob", "alice", "Downtown")
        session, prompt = scripted("d", "no", "alice", "pw", "Uptown", "0", "yes")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.ACCEPTED
        assert outcome.counterpart == "bob"
        assert seeded.confirmed_ride("bob") == ConfirmedRide("alice", "Downtown")
        assert seeded.pending_requests("alice") == []
        assert [o.destination for o in seeded.offers_for("alice")] == ["Downtown", "Uptown"]
        assert "0: bob -> Downtown" in prompt.shown

    def test_reject_pending_request(self, seeded, scripted):
        seeded.propose("bob", "alice", "Downtown")
        session, _ = scripted("d", "no", "alice", "pw", "Downtown", "0", "no")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.REJECTED
        assert seeded.confirmed_ride("bob") is None
        assert seeded.pending_requests("alice") == []

    def test_no_pending_requests(self, seeded, scripted):
        session, _ = scripted("d", "no", "alice", "pw", "Airport")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.NO_PENDING_REQUESTS
        assert outcome.message == "No ride requests at the moment."

    def test_invalid_index(self, seeded, scripted):
        seeded.propose("bob", "alice", "Downtown")
        session, _ = scripted("d", "no", "alice", "pw", "Airport", "3")
        assert session.run_round().status == RoundStatus.INVALID_INDEX
        assert len(seeded.pending_requests("alice")) == 1


class TestLoginAndRegistration:
    def test_invalid_role(self, scripted):
        session, prompt = scripted("x")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.INVALID_ROLE
        assert outcome.role is None
        assert prompt.shown == ["Invalid input. Exiting."]

    def test_invalid_credentials_end_round(self, seeded, scripted):
        session, prompt = scripted("d", "no", "alice", "wrong")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.INVALID_CREDENTIALS
        assert outcome.message == "Invalid driver credentials."
        assert not prompt.answers

    def test_taken_username_reprompts(self, platform, scripted):
        platform.register(Role.DRIVER, "carol", "pw")
        session, prompt = scripted(
            "d", "yes", "carol", "dave", "pw", "dave", "pw", "Airport"
        )
        outcome = session.run_round()

        assert "Username already taken. Choose a different username." in prompt.shown
        assert "Driver registration successful!" in prompt.shown
        assert platform.exists(Role.DRIVER, "dave")
        assert platform.offers_for("dave") == (Offer("dave", "Airport"),)
        assert outcome.status == RoundStatus.NO_PENDING_REQUESTS

    def test_rider_can_reuse_driver_name(self, seeded, scripted):
        session, _ = scripted("r", "yes", "alice", "pw2", "alice", "pw2", "Downtown", "0", "yes")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.ACCEPTED
        assert seeded.confirmed_ride("alice") == ConfirmedRide("alice", "Downtown")

    def test_empty_password_registers_and_logs_in(self, seeded, scripted):
        session, _ = scripted("r", "yes", "newbie", "", "newbie", "", "Downtown", "0", "yes")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.ACCEPTED
        assert seeded.confirmed_ride("newbie") == ConfirmedRide("alice", "Downtown")

    def test_unencodable_login_password_ends_round(self, seeded, scripted):
        session, _ = scripted("r", "no", "bob", "\udcff")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.INVALID_CREDENTIALS
        assert outcome.message == "Invalid rider credentials."

    def test_invalid_password_ends_round(self, platform, scripted):
        session, _ = scripted("r", "yes", "newbie", "\udcff")
        outcome = session.run_round()

        assert outcome.status == RoundStatus.INVALID_PASSWORD
        assert not platform.exists(Role.RIDER, "newbie")


class TestRunLoop:
    def test_repeats_until_exit(self, scripted):
        session, prompt = scripted("x", "no", "q", "YES")
        outcomes = session.run()

        assert [o.status for o in outcomes] == [RoundStatus.INVALID_ROLE] * 2
        assert prompt.shown[-1] == "Exiting the program. Thank you!"

    def test_state_carries_across_rounds(self, platform, scripted):
        session, _ = scripted(
            # driver registers and offers
            "d", "yes", "alice", "pw", "alice", "pw", "Downtown", "no",
            # rider registers and books
            "r", "yes", "bob", "pw", "bob", "pw", "Downtown", "0", "yes", "yes",
        )
        outcomes = session.run()

        assert [o.status for o in outcomes] == [
            RoundStatus.NO_PENDING_REQUESTS,
            RoundStatus.ACCEPTED,
        ]
        assert platform.confirmed_ride("bob") == ConfirmedRide("alice", "Downtown")

    def test_outcome_serialises(self, scripted):
        session, _ = scripted("x")
        payload = session.run_round().model_dump(mode="json")
        assert payload["status"] == "INVALID_ROLE"
        assert payload["ride"] is None
