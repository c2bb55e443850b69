"""
Tests for ModelLoader retry behaviour
"""
from unittest.mock import patch, Mock

import pytest

from operations.model_loader import ModelLoader


@patch('operations.model_loader.time.sleep')
@patch('operations.model_loader.SentenceTransformer')
def test_loads_on_first_attempt(mock_st, mock_sleep):
    model = Mock()
    mock_st.return_value = model

    assert ModelLoader.load("sentence-transformers/all-MiniLM-L6-v2") is model
    mock_sleep.assert_not_called()


@patch('operations.model_loader.time.sleep')
@patch('operations.model_loader.SentenceTransformer')
def test_retries_with_backoff(mock_st, mock_sleep):
    model = Mock()
    mock_st.side_effect = [OSError("offline"), OSError("offline"), model]

    assert ModelLoader.load("any-model") is model
    assert [c.args[0] for c in mock_sleep.call_args_list] == [5, 10]


@patch('operations.model_loader.time.sleep')
@patch('operations.model_loader.SentenceTransformer')
def test_gives_up_after_max_retries(mock_st, mock_sleep):
    mock_st.side_effect = OSError("offline")

    with pytest.raises(RuntimeError, match="after 3 attempts"):
        ModelLoader.load("any-model")
    assert mock_st.call_count == 3
