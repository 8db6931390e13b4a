# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Tests for team directory operations and the bulk deactivation cascade."""

import pytest

from app.services.errors import (
    TeamAlreadyExists,
    TeamNotFound,
    UserNotFound,
    UserNotInTeam,
)


def _get_pr(pr_repo, pr_id):
    with pr_repo.connect() as conn:
        return pr_repo.get(conn, pr_id)


def _get_user(user_repo, user_id):
    with user_repo.connect() as conn:
        return user_repo.get(conn, user_id)


@pytest.fixture
def staffed(make_team, pr_service, user_service):
    """
    Team ``t`` (u1..u5); PR ``p1`` by u1 reviewed by u2 and u3. u4 and u5 are
    activated only after the PR exists so its reviewers are deterministic.
    """
    make_team("t", {"u1": True, "u2": True, "u3": True, "u4": False, "u5": False})
    pr_service.create_pull_request("p1", "feature", "u1")
    user_service.set_active("u4", True)
    user_service.set_active("u5", True)


# ============================================
# Directory
# ============================================
class TestTeams:
    def test_create_and_get(self, make_team, team_service):
        created = make_team("backend", {"b2": False, "b1": True})
        assert created["team_name"] == "backend"
        fetched = team_service.get_team("backend")
        assert fetched == created
        assert [m["user_id"] for m in fetched["members"]] == ["b1", "b2"]
        assert fetched["members"][1]["is_active"] is False

    def test_empty_team(self, make_team):
        assert make_team("empty", {}) == {"team_name": "empty", "members": []}

    def test_duplicate_team_rejected(self, make_team):
        make_team("t", {"u1": True})
        with pytest.raises(TeamAlreadyExists) as exc:
            make_team("t", {"u2": True})
        assert exc.value.code == "TEAM_EXISTS"
        assert exc.value.status_code == 400

    def test_duplicate_team_leaves_members_untouched(self, make_team, user_repo):
        make_team("t", {"u1": True})
        with pytest.raises(TeamAlreadyExists):
            make_team("t", {"u1": False})
        assert _get_user(user_repo, "u1")["is_active"] is True

    def test_member_moves_between_teams(self, make_team, team_service, user_repo):
        make_team("t1", {"u1": True, "u2": True})
        make_team("t2", {"u1": False})
        assert _get_user(user_repo, "u1") == {
            "user_id": "u1", "username": "user-u1", "team_name": "t2", "is_active": False,
        }
        assert [m["user_id"] for m in team_service.get_team("t1")["members"]] == ["u2"]

    def test_unknown_team(self, team_service):
        with pytest.raises(TeamNotFound):
            team_service.get_team("nope")


# ============================================
# Deactivation cascade
# ============================================
class TestDeactivateMembers:
    def test_reviewer_replaced_round_robin(self, staffed, team_service, pr_repo, user_repo):
        result = team_service.deactivate_members("t", ["u2"])
        assert result == {"team_name": "t", "deactivated_user_ids": ["u2"], "reassigned_count": 1}
        pr = _get_pr(pr_repo, "p1")
        # Remaining pool is u1, u3, u4, u5; u1 authors and u3 already reviews.
        assert pr["assigned_reviewers"] == ["u3", "u4"]
        assert _get_user(user_repo, "u2")["is_active"] is False

    def test_author_reassigned(self, staffed, team_service, pr_repo):
        result = team_service.deactivate_members("t", ["u1"])
        assert result["reassigned_count"] == 1
        pr = _get_pr(pr_repo, "p1")
        assert pr["author_id"] == "u4"
        assert sorted(pr["assigned_reviewers"]) == ["u2", "u3"]

    def test_author_and_reviewers_together(self, staffed, team_service, pr_repo, user_repo):
        result = team_service.deactivate_members("t", ["u1", "u2", "u3"])
        assert result["deactivated_user_ids"] == ["u1", "u2", "u3"]
        pr = _get_pr(pr_repo, "p1")
        gone = {"u1", "u2", "u3"}
        assert pr["author_id"] not in gone
        assert not gone & set(pr["assigned_reviewers"])
        assert pr["author_id"] not in pr["assigned_reviewers"]
        for uid in gone:
            assert _get_user(user_repo, uid)["is_active"] is False

    def test_cascade_spreads_across_pool(self, make_team, pr_service, user_service,
                                         team_service, pr_repo):
        make_team("t", {"a": True, "x": True, "c": False, "d": False, "e": False})
        for n in range(3):
            pr_service.create_pull_request(f"p{n}", "x", "a")
        for uid in ("c", "d", "e"):
            user_service.set_active(uid, True)

        result = team_service.deactivate_members("t", ["x"])
        assert result["reassigned_count"] == 3
        picked = [_get_pr(pr_repo, f"p{n}")["assigned_reviewers"] for n in range(3)]
        assert picked == [["c"], ["d"], ["e"]]

    def test_no_replacement_leaves_partial_set(self, make_team, pr_service,
                                               team_service, pr_repo):
        make_team("t", {"a": True, "b": True, "c": True})
        pr_service.create_pull_request("p1", "x", "a")
        result = team_service.deactivate_members("t", ["b"])
        assert result["reassigned_count"] == 0
        assert _get_pr(pr_repo, "p1")["assigned_reviewers"] == ["c"]

    def test_whole_team_deactivated(self, make_team, pr_service, team_service, pr_repo):
        make_team("t", {"a": True, "b": True})
        pr_service.create_pull_request("p1", "x", "a")
        result = team_service.deactivate_members("t", ["a", "b"])
        assert result["reassigned_count"] == 0
        pr = _get_pr(pr_repo, "p1")
        assert pr["author_id"] == "a"
        assert pr["assigned_reviewers"] == []

    def test_merged_prs_untouched(self, staffed, pr_service, team_service, pr_repo):
        merged = pr_service.merge_pull_request("p1")
        result = team_service.deactivate_members("t", ["u1", "u2"])
        assert result["reassigned_count"] == 0
        assert _get_pr(pr_repo, "p1") == merged

    def test_empty_list_is_noop(self, staffed, team_service, pr_repo):
        before = _get_pr(pr_repo, "p1")
        result = team_service.deactivate_members("t", [])
        assert result == {"team_name": "t", "deactivated_user_ids": [], "reassigned_count": 0}
        assert _get_pr(pr_repo, "p1") == before

    def test_duplicate_ids_collapsed(self, staffed, team_service):
        result = team_service.deactivate_members("t", ["u2", "u2"])
        assert result["deactivated_user_ids"] == ["u2"]
        assert result["reassigned_count"] == 1

    def test_already_inactive_member_accepted(self, make_team, team_service, user_repo):
        make_team("t", {"a": True, "b": False})
        result = team_service.deactivate_members("t", ["b"])
        assert result["deactivated_user_ids"] == ["b"]
        assert _get_user(user_repo, "b")["is_active"] is False

    def test_unknown_team(self, team_service):
        with pytest.raises(TeamNotFound):
            team_service.deactivate_members("nope", ["u1"])

    def test_unknown_user_changes_nothing(self, staffed, team_service, user_repo):
        with pytest.raises(UserNotFound):
            team_service.deactivate_members("t", ["u2", "ghost"])
        assert _get_user(user_repo, "u2")["is_active"] is True

    def test_user_from_other_team(self, staffed, make_team, team_service, user_repo):
        make_team("other", {"o1": True})
        with pytest.raises(UserNotInTeam) as exc:
            team_service.deactivate_members("t", ["u2", "o1"])
        assert exc.value.code == "USER_NOT_IN_TEAM"
        assert exc.value.status_code == 400
        assert _get_user(user_repo, "u2")["is_active"] is True
        assert _get_user(user_repo, "o1")["is_active"] is True

    def test_failure_rolls_back_everything(self, staffed, team_service, user_repo,
                                           pr_repo, monkeypatch):
        before = _get_pr(pr_repo, "p1")

        def boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(user_repo, "deactivate", boom)
        with pytest.raises(RuntimeError):
            team_service.deactivate_members("t", ["u1", "u2"])

        assert _get_pr(pr_repo, "p1") == before
        assert _get_user(user_repo, "u1")["is_active"] is True
        assert _get_user(user_repo, "u2")["is_active"] is True


# ============================================
# Users
# ============================================
class TestUsers:
    def test_set_active(self, make_team, user_service):
        make_team("t", {"u1": True})
        user = user_service.set_active("u1", False)
        assert user == {"user_id": "u1", "username": "user-u1", "team_name": "t",
                        "is_active": False}

    def test_set_active_unknown(self, user_service):
        with pytest.raises(UserNotFound):
            user_service.set_active("ghost", True)

    def test_set_inactive_keeps_open_reviews(self, staffed, user_service, pr_repo):
        user_service.set_active("u2", False)
        assert "u2" in _get_pr(pr_repo, "p1")["assigned_reviewers"]

    def test_reviews_any_status(self, make_team, pr_service, user_service):
        make_team("t", {"a": True, "r": True})
        pr_service.create_pull_request("p1", "first", "a")
        pr_service.create_pull_request("p2", "second", "a")
        pr_service.merge_pull_request("p1")
        reviews = user_service.get_reviews("r")
        assert reviews == [
            {"pull_request_id": "p1", "pull_request_name": "first",
             "author_id": "a", "status": "MERGED"},
            {"pull_request_id": "p2", "pull_request_name": "second",
             "author_id": "a", "status": "OPEN"},
        ]

    def test_reviews_empty(self, make_team, user_service):
        make_team("t", {"a": True})
        assert user_service.get_reviews("a") == []

    def test_reviews_unknown_user(self, user_service):
        with pytest.raises(UserNotFound):
            user_service.get_reviews("ghost")
