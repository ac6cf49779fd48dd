import pytest

from shortlist.candidates import IncomingFile, Status
from shortlist.filters import FilterState
from shortlist.regions import Region
from shortlist.state import ALL_SCREENED, NO_MORE_MATCHING, Session

from conftest import pdf_file

P, K, R = Status.PENDING, Status.KEPT, Status.REJECTED


def test_next_pending_moves_forward(make_session):
    s = make_session(K, P, R, P, focus=0)
    assert s.select_next_pending() == 1
    assert s.current_index == 1


def test_next_pending_wraps_around(make_session):
    s = make_session(K, P, R, P, focus=3)
    assert s.select_next_pending() == 1


def test_next_pending_never_returns_current(make_session):
    s = make_session(K, P, R, focus=1)
    assert s.select_next_pending() is None
    assert s.current_index == 1
    assert s.notice == ALL_SCREENED


def test_next_pending_skips_invisible(make_session):
    s = make_session(K, P, P, focus=1)
    s.set_filters(FilterState(id_substring="c2"))
    assert s.select_next_pending() == 2


def test_no_match_message_mentions_filter(make_session):
    s = make_session(K, P, focus=0)
    s.set_filters(FilterState(region=Region.EUROPE))
    assert s.select_next_pending() is None
    assert s.current_index == 0
    assert s.notice == NO_MORE_MATCHING


def test_judge_records_history_and_advances(make_session):
    s = make_session(P, P, P, focus=0)
    assert s.judge(K) == 1
    assert s.candidates[0].status == K
    assert s.history[-1].index == 0
    assert s.history[-1].previous_status == P


def test_judge_without_focus_is_noop(make_session):
    s = make_session(P, focus=-1)
    assert s.judge(K) is None
    assert s.history == []
    assert s.candidates[0].status == P


def test_judge_rejects_pending_as_verdict(make_session):
    s = make_session(P, focus=0)
    with pytest.raises(ValueError):
        s.judge(P)


def test_undo_twice_restores_both(make_session):
    s = make_session(P, P, P, focus=0)
    s.judge(K)
    s.judge(R)
    assert s.undo() == 1
    assert s.current_index == 1
    assert s.undo() == 0
    assert [c.status for c in s.candidates] == [P, P, P]
    assert s.undo() is None
    assert s.current_index == 0


def test_undo_refocuses_even_when_filtered_out(make_session):
    s = make_session(P, P, focus=0)
    s.judge(K)
    s.set_filters(FilterState(id_substring="c1"))
    assert s.undo() == 0
    assert s.current_index == 0
    assert not s.is_visible(s.candidates[0])


def test_ingest_deduplicates_by_id(tmp_path):
    s = Session()
    added = s.ingest([pdf_file(tmp_path, "1234.pdf")])
    again = s.ingest([pdf_file(tmp_path, "1234.pdf"), pdf_file(tmp_path, "1234.PDF")])
    assert len(added) == 1
    assert again == []
    assert [c.id for c in s.candidates] == ["1234"]


def test_ingest_drops_non_pdf_and_focuses_first(tmp_path):
    s = Session()
    added = s.ingest([
        IncomingFile("notes.txt", "text/plain", tmp_path / "notes.txt"),
        pdf_file(tmp_path, "a.b.pdf"),
        pdf_file(tmp_path, "c.pdf"),
    ])
    assert [c.id for c in added] == ["a.b", "c"]
    assert all(c.status == P and c.extracted_text is None and c.region is None for c in added)
    assert s.current_index == 0


def test_kept_and_counts(make_session):
    s = make_session(K, P, R, K)
    assert [c.id for c in s.kept()] == ["c0", "c3"]
    assert s.counts() == (2, 4)


def test_judge_ignores_already_judged_candidate(make_session):
    s = make_session(K, P, focus=0)
    assert s.judge(R) is None
    assert s.candidates[0].status == K
    assert s.history == []


def test_widening_filter_refocuses_from_judged_candidate(tmp_path):
    s = Session()
    s.ingest([pdf_file(tmp_path, "a.pdf"), pdf_file(tmp_path, "b.pdf")])
    s.candidates[0].set_extraction("geneva", Region.SWITZERLAND)
    s.candidates[1].set_extraction("paris", Region.EUROPE)
    s.set_filters(FilterState(region=Region.SWITZERLAND))
    assert s.judge(K) is None
    assert s.notice == NO_MORE_MATCHING
    # focus is still on the kept candidate until the filter widens
    s.set_filters(FilterState())
    assert s.current_index == 1
    assert s.notice is None
    assert s.judge(K) is None
    assert [c.status for c in s.candidates] == [K, K]


def test_set_filters_keeps_pending_focus(make_session):
    s = make_session(P, P, focus=1)
    s.set_filters(FilterState(id_substring="c0"))
    assert s.current_index == 1


def test_refocus_without_match_leaves_notice_alone(make_session):
    s = make_session(K, R, focus=0)
    assert s.refocus() is None
    assert s.current_index == 0
    assert s.notice is None
