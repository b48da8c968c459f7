import pytest

from demokrat import config
from demokrat.election_state import ACTIVE_ID
from demokrat.errors import Forbidden, InvalidRequest, NoActiveElection
from demokrat.models.admin_model import PrivilegeLevel

from conftest import make_session


def election_rows(db):
    return list(db[config.ELECTIONS_COLLECTION_NAME].find({}))


def test_get_active_bootstraps_empty_election(elections, db):
    election = elections.get_active()
    assert election.post == ''
    assert not election.is_open
    assert [row['_id'] for row in election_rows(db)] == [ACTIVE_ID]
    # idempotent
    elections.get_active()
    assert len(election_rows(db)) == 1


def test_get_active_collapses_legacy_duplicates(elections, db):
    db[config.ELECTIONS_COLLECTION_NAME].insert_many([
        {'election': 'Chair'},
        {'election': 'Treasurer'},
        {'election': 'Secretary'},
    ])
    assert elections.get_active().post == 'Chair'
    rows = election_rows(db)
    assert len(rows) == 1
    assert rows[0]['_id'] == ACTIVE_ID
    assert rows[0]['post'] == 'Chair'


def test_get_active_prefers_canonical_row(elections, db):
    db[config.ELECTIONS_COLLECTION_NAME].insert_many([
        {'post': 'Stale'},
        {'_id': ACTIVE_ID, 'post': 'President'},
    ])
    assert elections.get_active().post == 'President'
    assert len(election_rows(db)) == 1


@pytest.mark.parametrize('n_duplicates', [0, 1, 4])
def test_set_active_leaves_exactly_one_row(elections, superadmin, db, n_duplicates):
    db[config.ELECTIONS_COLLECTION_NAME].insert_many(
        [{'post': f'old{i}'} for i in range(n_duplicates)] or [{'post': 'old'}]
    )
    elections.set_active(superadmin, '  President ')
    rows = election_rows(db)
    assert len(rows) == 1
    assert rows[0]['post'] == 'President'
    assert elections.get_active().post == 'President'


@pytest.mark.parametrize('level', [PrivilegeLevel.RESULTS_ONLY, PrivilegeLevel.NONE])
def test_set_active_forbidden(elections, db, level):
    with pytest.raises(Forbidden):
        elections.set_active(make_session(level), 'President')
    assert election_rows(db) == []


def test_modify_privilege_may_edit(elections):
    modify = make_session(PrivilegeLevel.MODIFY)
    elections.set_active(modify, 'President')
    assert elections.add_candidate(modify, 'CandidateX')


def test_candidates_are_deduplicated(open_election, superadmin):
    assert not open_election.add_candidate(superadmin, 'CandidateX')
    assert not open_election.add_candidate(superadmin, ' CandidateX ')
    assert open_election.list_candidates() == ['CandidateX', 'CandidateY', 'CandidateZ']


def test_candidates_are_scoped_to_post(open_election, superadmin):
    open_election.set_active(superadmin, 'Treasurer')
    assert open_election.list_candidates() == []
    open_election.add_candidate(superadmin, 'CandidateX')
    assert open_election.list_candidates() == ['CandidateX']
    assert open_election.list_candidates('President') == ['CandidateX', 'CandidateY', 'CandidateZ']


def test_remove_candidate_is_idempotent(open_election, superadmin):
    assert open_election.remove_candidate(superadmin, 'CandidateY')
    assert not open_election.remove_candidate(superadmin, 'CandidateY')
    assert open_election.list_candidates() == ['CandidateX', 'CandidateZ']


def test_results_only_cannot_touch_candidates(open_election):
    viewer = make_session(PrivilegeLevel.RESULTS_ONLY)
    with pytest.raises(Forbidden):
        open_election.add_candidate(viewer, 'CandidateW')
    with pytest.raises(Forbidden):
        open_election.remove_candidate(viewer, 'CandidateX')
    assert 'CandidateX' in open_election.list_candidates()


def test_add_candidate_requires_open_election(elections, superadmin):
    with pytest.raises(NoActiveElection):
        elections.add_candidate(superadmin, 'CandidateX')


def test_add_candidate_rejects_blank_name(open_election, superadmin):
    with pytest.raises(InvalidRequest):
        open_election.add_candidate(superadmin, '   ')


def test_collapse_keeps_concurrent_set_active(elections, superadmin, db, monkeypatch):
    db[config.ELECTIONS_COLLECTION_NAME].insert_one({'post': 'Old'})
    collapse = elections._collapse

    def set_active_then_collapse(post, found):
        # another admin saves a post after the rows were read
        elections.set_active(superadmin, 'President')
        return collapse(post, found)

    monkeypatch.setattr(elections, '_collapse', set_active_then_collapse)
    assert elections.get_active().post == 'President'
    assert [(row['_id'], row['post']) for row in election_rows(db)] == [(ACTIVE_ID, 'President')]
