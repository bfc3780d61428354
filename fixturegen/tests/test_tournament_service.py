"""
Tests for the tournament service: generation guards, invalidation, gameweek queries.
"""
from __future__ import annotations

import threading
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from fixturegen.services.tournament_service import (
    NotEnoughParticipantsError,
    TournamentService,
)


@pytest.fixture
def service():
    return TournamentService()


@pytest.fixture
def four_players(service):
    """Service with P1..P4 registered in order."""
    return [service.add_participant(f"P{i}") for i in range(1, 5)]


def test_schedule_empty_before_generation(service, four_players):
    assert service.get_schedule().is_empty
    assert service.list_gameweeks() == []


def test_generate_four_single(service, four_players):
    schedule = service.generate()
    assert len(schedule) == 6
    assert service.list_gameweeks() == [1, 2, 3]
    p1 = four_players[0]
    for g in (1, 2, 3):
        fixtures = service.get_fixtures_by_gameweek(g)
        assert len(fixtures) == 2
        # P1 is anchored and always listed first
        assert fixtures[0].home == p1


def test_generate_two_players(service):
    a = service.add_participant("P1")
    b = service.add_participant("P2")
    schedule = service.generate()
    assert [(f.gameweek, f.home, f.away) for f in schedule] == [(1, a, b)]


def test_generate_three_players(service):
    for name in ("P1", "P2", "P3"):
        service.add_participant(name)
    schedule = service.generate()
    assert len(schedule) == 3
    assert service.list_gameweeks() == [1, 2, 3]
    assert all(len(service.get_fixtures_by_gameweek(g)) == 1 for g in (1, 2, 3))


def test_generate_below_threshold_is_noop(service):
    assert service.generate().is_empty
    service.add_participant("Solo")
    assert service.generate(doubled=True).is_empty
    assert service.get_schedule().is_empty
    assert not service.can_generate()


def test_assert_can_generate(service):
    service.add_participant("A")
    with pytest.raises(NotEnoughParticipantsError):
        service.assert_can_generate()
    service.add_participant("B")
    service.assert_can_generate()


def test_strict_generate_rejects_too_few_without_side_effects(service):
    service.add_participant("A")
    with pytest.raises(NotEnoughParticipantsError):
        service.generate(doubled=True, strict=True)
    assert service.doubled is False
    assert service.get_schedule().is_empty
    service.add_participant("B")
    assert len(service.generate(strict=True)) == 1


def test_get_participant(service, four_players):
    p2 = four_players[1]
    assert service.get_participant(p2.id) == p2
    service.attach_image(p2.id, "img")
    assert service.get_participant(p2.id).image == "img"
    assert service.get_participant("missing") is None
    service.remove_participant(p2.id)
    assert service.get_participant(p2.id) is None


def test_doubled_override_updates_flag(service, four_players):
    schedule = service.generate(doubled=True)
    assert service.doubled is True
    assert len(schedule) == 12
    assert service.list_gameweeks() == [1, 2, 3, 4, 5, 6]


def test_remove_invalidates_schedule(service, four_players):
    service.generate()
    assert service.remove_participant(four_players[2].id) is True
    assert service.get_schedule().is_empty
    assert service.list_gameweeks() == []


def test_remove_unknown_keeps_schedule(service, four_players):
    before = service.generate()
    assert service.remove_participant("missing") is False
    assert service.get_schedule() is before


def test_add_invalidates_schedule(service, four_players):
    service.generate()
    service.add_participant("P5")
    assert service.get_schedule().is_empty


def test_blank_add_keeps_schedule(service, four_players):
    before = service.generate()
    assert service.add_participant("   ") is None
    assert service.get_schedule() is before


def test_attach_image_keeps_schedule(service, four_players):
    before = service.generate()
    updated = service.attach_image(four_players[0].id, "img")
    assert updated is not None and updated.image == "img"
    assert service.get_schedule() is before
    assert service.attach_image("missing", "img") is None


def test_toggle_doubled_invalidates_only_on_change(service, four_players):
    before = service.generate()
    service.set_doubled(False)
    assert service.get_schedule() is before
    service.set_doubled(True)
    assert service.get_schedule().is_empty


def test_regenerate_after_removal_uses_new_snapshot(service, four_players):
    service.generate()
    service.remove_participant(four_players[0].id)
    schedule = service.generate()
    assert len(schedule) == 3
    ids = {p for f in schedule for p in (f.home.id, f.away.id)}
    assert four_players[0].id not in ids


def test_gameweek_out_of_range(service, four_players):
    service.generate()
    assert service.get_fixtures_by_gameweek(99) == []
    assert service.get_fixtures_by_gameweek(0) == []
    assert service.get_fixtures_by_gameweek(-1) == []


def test_summary_tracks_registry_and_mode(service, four_players):
    s = service.summary()
    assert (s.total_matches, s.total_gameweeks, s.matches_per_gameweek) == (6, 3, 2)
    service.set_doubled(True)
    service.add_participant("P5")
    s = service.summary()
    assert (s.participant_count, s.total_matches, s.total_gameweeks) == (5, 20, 10)


def test_reset_clears_everything(service, four_players):
    service.generate()
    service.reset()
    assert service.list_participants() == []
    assert service.get_schedule().is_empty


def test_concurrent_mutation_never_exposes_stale_schedule(service, four_players):
    """Readers either see an empty schedule or one built from the current roster."""
    errors: list[str] = []

    def writer():
        for i in range(200):
            p = service.add_participant(f"X{i}")
            service.generate()
            service.remove_participant(p.id)
            service.generate()

    def reader():
        for _ in range(500):
            schedule = service.get_schedule()
            if schedule.is_empty:
                continue
            roster = {p.id for p in service.list_participants()}
            used = {p for f in schedule for p in (f.home.id, f.away.id)}
            if not used <= roster and service.get_schedule() is schedule:
                errors.append("stale schedule visible")

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_strict_guard_and_generation_share_one_critical_section():
    """A removal racing a strict generate waits until the schedule is built."""

    class RacingService(TournamentService):
        remover: threading.Thread | None = None
        blocked_during_generate = False

        def assert_can_generate(self) -> None:
            super().assert_can_generate()
            if self.remover is None:
                victim = self.list_participants()[-1].id
                self.remover = threading.Thread(target=self.remove_participant, args=(victim,))
                self.remover.start()
                self.remover.join(timeout=0.2)
                self.blocked_during_generate = self.remover.is_alive()

    service = RacingService()
    service.add_participant("A")
    service.add_participant("B")
    schedule = service.generate(strict=True)
    assert len(schedule) == 1
    assert service.blocked_during_generate is True
    service.remover.join()
    assert service.participant_count() == 1
    assert service.get_schedule().is_empty
