"""Tests for the cross-encoder scorer (model loading is stubbed)."""

from unittest.mock import MagicMock

import pytest

from rerank_metrics.packages.cross_encoder_scorer import CrossEncoderScorer


def _model(scores):
    model = MagicMock()
    model.predict.side_effect = lambda pairs, **kwargs: [scores[text] for _, text in pairs]
    return model


class TestCrossEncoderScorer:
    def test_scores_in_input_order_across_batches(self):
        model = _model({"a": 0.1, "b": 0.9, "c": 0.5})
        scorer = CrossEncoderScorer(batch_size=2, model_loader=lambda name: model)

        assert scorer.score("q", ["a", "b", "c"]) == [0.1, 0.9, 0.5]
        assert model.predict.call_count == 2
        first_pairs = model.predict.call_args_list[0][0][0]
        assert first_pairs == [("q", "a"), ("q", "b")]

    def test_model_loaded_once(self):
        loader = MagicMock(return_value=_model({"a": 1.0}))
        scorer = CrossEncoderScorer(model_name="my-model", model_loader=loader)
        scorer.score("q", ["a"])
        scorer.score("q", ["a"])
        loader.assert_called_once_with("my-model")

    def test_empty_texts_do_not_load_model(self):
        loader = MagicMock()
        assert CrossEncoderScorer(model_loader=loader).score("q", []) == []
        loader.assert_not_called()

    def test_non_finite_scores_become_zero(self):
        model = _model({"a": float("nan"), "b": float("inf"), "c": "bad"})
        scorer = CrossEncoderScorer(model_loader=lambda name: model)
        assert scorer.score("q", ["a", "b", "c"]) == [0.0, 0.0, 0.0]

    def test_batch_size_is_clamped(self):
        assert CrossEncoderScorer(batch_size=0).batch_size == 1
        assert CrossEncoderScorer(batch_size=500).batch_size == 50

    def test_rejects_empty_model_name(self):
        with pytest.raises(ValueError):
            CrossEncoderScorer(model_name=" ")
