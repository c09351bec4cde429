"""Tests for payload validation and batch ingestion."""

import threading

import pytest

from src.customers.ingestion import BatchOutcome, accept, ingest_batch, parse_contacts
from src.customers.models import Customer


class TestAccept:
    def test_assigns_smallest_free_id(self, repository):
        repository.save(Customer(id=0, last_name="A"))
        repository.save(Customer(id=2, last_name="B"))
        c = accept({"name": "Doe"}, repository)
        assert c.id == 1

    def test_uses_given_id(self, repository):
        c = accept({"id": 5, "first": "Jo", "name": "Doe"}, repository)
        assert c.id == 5
        assert c.first_name == "Jo"
        assert c.last_name == "Doe"

    def test_numeric_string_id(self, repository):
        assert accept({"id": "12", "name": "Doe"}, repository).id == 12

    @pytest.mark.parametrize("raw_id", ["abc", "5.5", 5.5, True, [1], "1_000", "\u0661\u0662", " 7", "1e3", 2**63])
    def test_non_numeric_id_is_malformed(self, repository, raw_id):
        assert accept({"id": raw_id, "name": "Doe"}, repository) is None

    @pytest.mark.parametrize("raw_id", [None, ""])
    def test_empty_id_is_assigned(self, repository, raw_id):
        assert accept({"id": raw_id, "name": "Doe"}, repository).id == 0

    def test_negative_id_is_malformed(self, repository):
        assert accept({"id": -1, "name": "Doe"}, repository) is None

    def test_missing_name_is_malformed(self, repository):
        assert accept({"id": 5}, repository) is None
        assert accept({"first": "Jo"}, repository) is None
        assert accept({"first": "Jo", "name": None}, repository) is None
        assert accept({"name": "   "}, repository) is None

    def test_name_without_first(self, repository):
        c = accept({"id": 5, "name": "A"}, repository)
        assert c.last_name == "A"
        assert c.first_name == ""

    def test_contacts_split_and_ordered(self, repository):
        c = accept({"name": "Doe", "contacts": " a@x.com ;b@y.org;  +49 123 "}, repository)
        assert c.contacts == ["a@x.com", "b@y.org", "+49 123"]

    def test_non_mapping_is_malformed(self, repository):
        assert accept(["name", "Doe"], repository) is None
        assert accept("Doe", repository) is None

    def test_accept_does_not_write(self, repository):
        accept({"name": "Doe"}, repository)
        assert repository.count() == 0


def test_parse_contacts():
    assert parse_contacts(None) == []
    assert parse_contacts("") == []
    assert parse_contacts("one") == ["one"]
    assert parse_contacts("a; ;b;") == ["a", "b"]
    assert parse_contacts(["a", " b ", None]) == ["a", "b"]


class TestIngestBatch:
    def test_full_acceptance_assigns_sequential_ids(self, repository):
        payload = [{"first": "Jo", "name": "Doe", "contacts": "a@x.com"}]

        r1 = ingest_batch(payload, repository)
        assert r1.outcome == BatchOutcome.CREATED
        assert r1.body == []
        assert repository.find_by_id(0).contacts == ["a@x.com"]

        r2 = ingest_batch(payload, repository)
        assert r2.outcome == BatchOutcome.CREATED
        assert repository.exists_by_id(1)
        assert repository.count() == 2

    def test_ids_assigned_within_one_batch_do_not_collide(self, repository):
        r = ingest_batch([{"name": "A"}, {"name": "B"}, {"name": "C"}], repository)
        assert r.outcome == BatchOutcome.CREATED
        assert sorted(c.id for c in repository.find_all()) == [0, 1, 2]

    def test_malformed_rejects_whole_batch(self, repository):
        good = {"id": 1, "name": "Good"}
        bad = {"id": 5}
        r = ingest_batch([good, bad], repository)
        assert r.outcome == BatchOutcome.BAD_REQUEST
        assert r.outcome.status_code == 400
        assert r.body == [bad]
        assert repository.count() == 0

    def test_malformed_wins_over_conflict(self, repository):
        repository.save(Customer(id=1, last_name="Existing"))
        r = ingest_batch([{"id": 1, "name": "Dup"}, {"id": "x", "name": "Bad"}], repository)
        assert r.outcome == BatchOutcome.BAD_REQUEST
        assert r.body == [{"id": "x", "name": "Bad"}]

    def test_conflict_rejects_whole_batch(self, repository):
        first = {"id": 5, "name": "A"}
        assert ingest_batch([first], repository).outcome == BatchOutcome.CREATED

        second = {"id": 5, "name": "A"}
        r = ingest_batch([{"id": 6, "name": "New"}, second], repository)
        assert r.outcome == BatchOutcome.CONFLICT
        assert r.outcome.status_code == 409
        assert r.body == [second]
        assert repository.count() == 1
        assert not repository.exists_by_id(6)

    def test_duplicate_ids_within_batch_conflict(self, repository):
        r = ingest_batch([{"id": 3, "name": "A"}, {"id": 3, "name": "B"}], repository)
        assert r.outcome == BatchOutcome.CONFLICT
        assert r.body == [{"id": 3, "name": "B"}]
        assert repository.count() == 0

    def test_missing_payload_is_bad_request(self, repository):
        r = ingest_batch(None, repository)
        assert r.outcome == BatchOutcome.BAD_REQUEST
        assert r.body is None

    def test_object_instead_of_list_is_bad_request(self, repository):
        r = ingest_batch({"name": "Doe"}, repository)
        assert r.outcome == BatchOutcome.BAD_REQUEST
        assert repository.count() == 0

    def test_empty_list_is_created(self, repository):
        r = ingest_batch([], repository)
        assert r.outcome == BatchOutcome.CREATED
        assert repository.count() == 0


def test_signed_id_strings(repository):
    assert accept({"id": "+8", "name": "Doe"}, repository).id == 8
    assert accept({"id": "-3", "name": "Doe"}, repository) is None


def test_concurrent_batches_get_distinct_ids(repository):
    workers = 16
    barrier = threading.Barrier(workers)
    outcomes = []

    def post_one():
        barrier.wait()
        outcomes.append(ingest_batch([{"name": "X"}], repository).outcome)

    threads = [threading.Thread(target=post_one) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes == [BatchOutcome.CREATED] * workers
    assert repository.count() == workers
    assert sorted(c.id for c in repository.find_all()) == list(range(workers))
