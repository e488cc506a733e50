"""
Step definitions for anchor creation and restoration scenarios.
"""

from behave import given, then, when  # type: ignore[import-untyped]

from anchoring import (
    AnchorBuilder,
    LxmlDocument,
    MultiSelector,
    RestorationOrchestrator,
    TextSpan,
    Tier,
)
from anchoring.document import FlattenedText


def _span_for(document, needle, occurrence=1):
    """Span of the nth occurrence of ``needle`` in the document text."""
    flattened = FlattenedText.from_document(document)
    start = -1
    for _ in range(occurrence):
        start = flattened.text.index(needle, start + 1)
    end = start + len(needle)
    start_leaf, start_offset = flattened.locate(start)
    end_leaf, end_offset = flattened.locate(end, is_end=True)
    return TextSpan(start_leaf, start_offset, end_leaf, end_offset)


# === Documents and anchors ===


@given("the document:")  # type: ignore[misc]
def step_given_document(context):
    """Parse the HTML document anchors are created in."""
    context.document = LxmlDocument.from_html(context.text)


@given('an anchor on "{needle}"')  # type: ignore[misc]
def step_given_anchor(context, needle):
    """Create an anchor for the first occurrence of a text."""
    context.selector = AnchorBuilder().build(
        context.document, _span_for(context.document, needle)
    )


@given('an anchor on occurrence {occurrence:d} of "{needle}"')  # type: ignore[misc]
def step_given_anchor_occurrence(context, occurrence, needle):
    """Create an anchor for a later occurrence of a repeated text."""
    context.selector = AnchorBuilder().build(
        context.document, _span_for(context.document, needle, occurrence)
    )


@given("anchors on:")  # type: ignore[misc]
def step_given_anchors(context):
    """Create anchors for every text in the table."""
    spans = [_span_for(context.document, row["text"]) for row in context.table]
    context.selectors = AnchorBuilder().build_many(context.document, spans)


@given("the document is edited to:")  # type: ignore[misc]
def step_given_edited(context):
    """Replace the document with an edited version."""
    context.document = LxmlDocument.from_html(context.text)


# === Restoration ===


@when("I store and reload the anchor as JSON")  # type: ignore[misc]
def step_when_json_round_trip(context):
    context.selector = MultiSelector.from_json(context.selector.to_json())


@when("I restore the anchor")  # type: ignore[misc]
def step_when_restore(context):
    context.outcome = RestorationOrchestrator().restore(context.selector, context.document)


@when("I restore all anchors")  # type: ignore[misc]
def step_when_restore_all(context):
    context.outcomes = RestorationOrchestrator().restore_batch(
        context.selectors, context.document
    )


# === Assertions ===


@then("the anchor is restored by the {tier} tier")  # type: ignore[misc]
def step_then_restored_by(context, tier):
    """Assert the winning tier."""
    outcome = context.outcome
    assert outcome.succeeded, f"Expected a restored span but got {outcome.failures}"
    assert outcome.tier == Tier(tier), f"Expected {tier} but got {outcome.tier.value}"


@then('the restored text is "{expected_text}"')  # type: ignore[misc]
def step_then_restored_text(context, expected_text):
    actual = context.outcome.span.text
    assert actual == expected_text, f"Expected '{expected_text}' but got '{actual}'"


@then('the structural tier failed with "{error}"')  # type: ignore[misc]
def step_then_structural_failed(context, error):
    failures = {failure.tier: failure.error for failure in context.outcome.failures}
    assert failures.get(Tier.STRUCTURAL) == error, f"Unexpected failures: {failures}"


@then("the anchor could not be restored")  # type: ignore[misc]
def step_then_failed(context):
    outcome = context.outcome
    assert not outcome.succeeded, f"Expected failure but got {outcome.tier.value}"
    assert outcome.tier == Tier.FAILED
    assert outcome.span is None


@then('the failed tiers are "{tiers}"')  # type: ignore[misc]
def step_then_failed_tiers(context, tiers):
    expected = [Tier(name.strip()) for name in tiers.split(",")]
    actual = [failure.tier for failure in context.outcome.failures]
    assert actual == expected, f"Expected failures {expected} but got {actual}"


@then("every anchor is restored by the {tier} tier")  # type: ignore[misc]
def step_then_all_restored_by(context, tier):
    actual = [outcome.tier for outcome in context.outcomes]
    assert actual == [Tier(tier)] * len(context.selectors), (
        f"Expected all {tier} but got {[t.value for t in actual]}"
    )


@then('the last failure is "{error}"')  # type: ignore[misc]
def step_then_last_failure(context, error):
    actual = context.outcome.failures[-1].error
    assert actual == error, f"Expected last failure {error} but got {actual}"
