"""Tests for per-category feedback."""

from unittest.mock import patch

import pytest

from rowtrack.crud.feedback import add_category_feedback, feedback_history, latest_feedback
from rowtrack.exceptions import AppException
from rowtrack.models import Category


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_feedback_makes_no_store_call(repo, people, text):
    with patch.object(repo, "add_category_feedback", wraps=repo.add_category_feedback) as spy, \
            patch.object(repo, "get_user", wraps=repo.get_user) as lookup:
        result = add_category_feedback(repo, people["jan"], Category.roeitechniek, text, people["teacher"])
    assert result is None
    spy.assert_not_called()
    lookup.assert_not_called()


def test_history_is_newest_first(repo, people):
    for text in ("eerste", "tweede", "derde"):
        add_category_feedback(repo, people["jan"], "stuurkunst", text, people["teacher"])
    add_category_feedback(repo, people["jan"], "roeitechniek", "ander", people["teacher"])

    history = feedback_history(repo, people["jan"], Category.stuurkunst)
    assert [f.feedback for f in history] == ["derde", "tweede", "eerste"]
    assert latest_feedback(repo, people["jan"], "stuurkunst").feedback == "derde"


def test_latest_is_none_without_feedback(repo, people):
    assert latest_feedback(repo, people["emma"], Category.verrichtingen) is None


def test_unknown_category_rejected(repo, people):
    with pytest.raises(AppException) as exc:
        add_category_feedback(repo, people["jan"], "zwemmen", "tekst", people["teacher"])
    assert exc.value.status_code == 400
