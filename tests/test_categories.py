"""Tests for category placement, label consistency and coverage."""

from __future__ import annotations

from idk_validator.findings import Severity

MISPLACED = """# REFINE this

**Category**: Core Commands

**Definition**: Refine a plan until every step is concrete.

## Example Prompts

- `refine this plan for the migration`
- `refine this roadmap before review`

## Expected Output Format

```markdown
## Refined Plan
- Step one with an owner and a date
- Step two with an owner and a date
```
"""


def codes(report):
    return [f.code for f in report.findings]


class TestCategoryPlacement:
    def test_label_disagrees_with_directory(self, corpus_texts, run_validation):
        corpus_texts["dictionary/workflow/refine.md"] = MISPLACED
        report = run_validation(corpus_texts)

        assert report.passed
        assert codes(report) == ["W001"]
        finding = report.findings[0]
        assert finding.severity == Severity.WARNING
        assert finding.document == "dictionary/workflow/refine.md"
        assert '"Workflow Commands"' in finding.message

    def test_unknown_directory(self, corpus_texts, run_validation):
        corpus_texts["dictionary/misc/refine.md"] = MISPLACED
        report = run_validation(corpus_texts)

        assert [f.code for f in report.errors] == ["S013"]
        assert '"misc"' in report.errors[0].message

    def test_entry_directly_under_root(self, corpus_texts, run_validation):
        corpus_texts["dictionary/refine.md"] = MISPLACED
        report = run_validation(corpus_texts)

        assert [f.code for f in report.errors] == ["S013"]
        assert "dictionary root" in report.errors[0].message

    def test_nested_directories_use_first_segment(self, corpus_texts, run_validation):
        corpus_texts["dictionary/core/advanced/refine.md"] = MISPLACED
        assert run_validation(corpus_texts).findings == []


class TestCategoryCoverage:
    def test_empty_category_directory(self, corpus_texts, run_validation, settings):
        partition = dict(settings.category_partition, security="Security Commands")
        custom = settings.model_copy(update={"category_partition": partition})
        report = run_validation(corpus_texts, settings_override=custom)

        assert codes(report) == ["W006"]
        assert '"security"' in report.findings[0].message
