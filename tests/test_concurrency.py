"""
Relationship mutations from several threads against a file-backed database,
each thread with its own session and connection.
"""

import threading
import time

from pawsocial.core import relationships
from pawsocial.core.constants import RelationshipStatus
from pawsocial.core.errors import BlockedError
from pawsocial.core.transactions import with_retries
from pawsocial.models.block import BlockEdge
from pawsocial.models.follow import FollowEdge


def _pair_state(factory):
    session = factory()
    try:
        blocked = relationships.is_blocked(session, "alice", "bob")
        follow_edges = (
            session.query(FollowEdge)
            .filter(
                FollowEdge.follower_id.in_(["alice", "bob"]),
                FollowEdge.following_id.in_(["alice", "bob"]),
            )
            .count()
        )
        blocks = session.query(BlockEdge).count()
    finally:
        session.close()
    return blocked, follow_edges, blocks


def _run_in_threads(factory, calls):
    """Start every call at once; returns (results, errors) keyed by index."""
    barrier = threading.Barrier(len(calls))
    results, errors = {}, {}
    lock = threading.Lock()

    def worker(index, call):
        session = factory()
        try:
            barrier.wait()
            outcome = with_retries(lambda: call(session), attempts=5)
            with lock:
                results[index] = outcome
        except Exception as exc:
            with lock:
                errors[index] = exc
        finally:
            session.close()

    threads = [
        threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results, errors


class TestFollowBlockRace:

    def test_block_committing_during_follow_check_removes_the_follow(
        self, file_session_factory, monkeypatch
    ):
        original_is_blocked = relationships.is_blocked
        block_result = {}
        block_started = threading.Event()
        raced = []

        def run_block():
            session = file_session_factory()
            try:
                block_started.set()
                block_result["status"] = relationships.block(session, "bob", "alice")
            finally:
                session.close()

        blocker = threading.Thread(target=run_block)

        def is_blocked_then_block(db, account_a_id, account_b_id):
            answer = original_is_blocked(db, account_a_id, account_b_id)
            if not raced:
                raced.append(True)
                # Give the block every chance to commit between check and insert
                blocker.start()
                block_started.wait(5)
                time.sleep(0.3)
            return answer

        monkeypatch.setattr(relationships, "is_blocked", is_blocked_then_block)

        session = file_session_factory()
        try:
            follow_status = relationships.follow(session, "alice", "bob")
        finally:
            session.close()
        blocker.join(30)
        monkeypatch.undo()

        assert follow_status == RelationshipStatus.FOLLOWED
        assert block_result["status"] == RelationshipStatus.BLOCKED

        blocked, follow_edges, _ = _pair_state(file_session_factory)
        assert blocked
        assert follow_edges == 0

    def test_mixed_follows_and_block_never_coexist(self, file_session_factory):
        results, errors = _run_in_threads(
            file_session_factory,
            [
                lambda s: relationships.follow(s, "alice", "bob"),
                lambda s: relationships.follow(s, "bob", "alice"),
                lambda s: relationships.block(s, "bob", "alice"),
                lambda s: relationships.follow(s, "alice", "bob"),
            ],
        )

        assert all(isinstance(e, BlockedError) for e in errors.values())
        assert results[2] == RelationshipStatus.BLOCKED

        blocked, follow_edges, _ = _pair_state(file_session_factory)
        assert blocked
        assert follow_edges == 0


class TestConcurrentBlocks:

    def test_two_identical_blocks_apply_once(self, file_session_factory):
        session = file_session_factory()
        relationships.follow(session, "alice", "bob")
        relationships.follow(session, "bob", "alice")
        session.close()

        results, errors = _run_in_threads(
            file_session_factory,
            [
                lambda s: relationships.block(s, "alice", "bob"),
                lambda s: relationships.block(s, "alice", "bob"),
            ],
        )

        assert errors == {}
        assert sorted(r.value for r in results.values()) == ["already_blocked", "blocked"]

        blocked, follow_edges, blocks = _pair_state(file_session_factory)
        assert blocked
        assert follow_edges == 0
        assert blocks == 1
