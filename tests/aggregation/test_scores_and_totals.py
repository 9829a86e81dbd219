from __future__ import annotations

import pytest

from src.classroom_records.classroom_records.aggregation.calculator.base import TotalCalculator
from src.classroom_records.classroom_records.aggregation.calculator.weighted_calculator import WeightedTotalCalculator
from src.classroom_records.classroom_records.aggregation.engine import participation_score, weighted_total
from src.classroom_records.classroom_records.core.enums import GradeCategory
from src.classroom_records.classroom_records.grades.model import GradeRecord


def test_participation_score_table():
    assert [participation_score(n) for n in range(6)] == [0, 3, 6, 9, 10, 10]


def test_participation_score_negative_count_scores_zero():
    assert participation_score(-2) == 0


def test_weighted_total_midterm_and_final_only():
    scores = {GradeCategory.MIDTERM: 8, GradeCategory.FINAL: 7}
    assert weighted_total(scores) == 7.43


def test_weighted_total_no_scores_is_zero():
    assert weighted_total({c: None for c in GradeCategory}) == 0.0


def test_weighted_total_counts_zero_score_as_present():
    scores = {GradeCategory.MIDTERM: 0, GradeCategory.FINAL: 10}
    # (0*.30 + 10*.40) / .70
    assert weighted_total(scores) == 5.71


def test_weighted_total_all_tens():
    assert weighted_total({c: 10 for c in GradeCategory}) == 10.0


def test_weighted_total_custom_weights():
    weights = {GradeCategory.MIDTERM: 0.5, GradeCategory.FINAL: 0.5}
    scores = {GradeCategory.MIDTERM: 6, GradeCategory.FINAL: 9, GradeCategory.PROJECT: 1}
    assert weighted_total(scores, weights) == 7.5


def test_weighted_calculator_uses_record_scores():
    record = GradeRecord(student_account="1002", midterm=8, final=7)
    assert WeightedTotalCalculator().total(record) == 7.43


def test_total_calculator_is_abstract():
    with pytest.raises(TypeError):
        TotalCalculator()
