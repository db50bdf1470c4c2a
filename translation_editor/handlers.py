"""Gradio event handlers for the editor UI.

Handlers are plain functions over the session state (baseline index and
change-set) so they can be exercised without a running Blocks app.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from .changeset import count_shown_changes, merged_value, proposed_paths, record_change
from .config import EditorSettings
from .editable_node import is_editable_node
from .errors import ConfigurationError, EmptyChangeSetError, MalformedKeyError, TranslationEditorError
from .filtering import KeyPathsCriterion, criterion_from_search, filter_entries
from .flat_index import FlatIndex
from .flattening import build_baseline
from .io_utils import read_json_content
from .paths import format_path
from .revision import resolve_revision
from .storage import ChangeSetStore
from .submission import build_pull_request_payload, describe_issues, submit_pull_request

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["Path", "en", "ja", "Proposed en", "Proposed ja"]
MAX_ROWS = 500


def load_baseline(settings: EditorSettings) -> FlatIndex:
    try:
        data = read_json_content(settings.data_file, expect_object=True)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot load translation data from {settings.data_file}: {exc}") from exc
    return build_baseline(data, is_editable_node)


def _text(value: Any, field: str) -> str:
    if isinstance(value, dict):
        v = value.get(field)
        return v if isinstance(v, str) else ""
    return "" if value is None else str(value)


def build_view_rows(view: FlatIndex, changes: Dict[str, Any], limit: int = MAX_ROWS) -> List[List[str]]:
    rows: List[List[str]] = []
    for entry in view.entries[:max(0, int(limit))]:
        proposal = changes.get(entry.key)
        rows.append([
            format_path(entry.path),
            _text(entry.value, 'en'),
            _text(entry.value, 'ja'),
            _text(proposal, 'en') if proposal is not None else "",
            _text(proposal, 'ja') if proposal is not None else "",
        ])
    return rows


def status_text(view: FlatIndex, changes: Dict[str, Any]) -> str:
    text = f"Changes: {len(changes)} (shown: {count_shown_changes(view, changes)}) | Entries: {len(view)}"
    if len(view) > MAX_ROWS:
        text += f" (first {MAX_ROWS} displayed)"
    return text


def path_choices(view: FlatIndex, limit: int = MAX_ROWS) -> List[Tuple[str, str]]:
    return [(format_path(e.path), e.key) for e in view.entries[:limit]]


def current_view(baseline: FlatIndex, changes: Dict[str, Any], query: str, include_proposed: bool) -> FlatIndex:
    criterion = criterion_from_search(query or "", bool(include_proposed), proposed_paths(changes))
    return filter_entries(baseline, criterion)


def render_view(baseline: FlatIndex, changes: Dict[str, Any], query: str, include_proposed: bool, selected=None):
    view = current_view(baseline, changes, query, include_proposed)
    return (
        build_view_rows(view, changes),
        status_text(view, changes),
        gr.update(choices=path_choices(view), value=selected),
    )


def handle_search(baseline, changes, query, include_proposed, store: Optional[ChangeSetStore] = None):
    if baseline is None:
        return [], "No data loaded.", gr.update(choices=[], value=None)
    changes = changes or {}
    if store is not None:
        store.save_search_query(query)
    return render_view(baseline, changes, query, include_proposed)


def handle_select_path(baseline, changes, key):
    """Prefill the proposal boxes with the current proposal or the source values."""
    if baseline is None or not key:
        return "", ""
    changes = changes or {}
    try:
        entry = baseline.get(key)
    except MalformedKeyError as exc:
        logger.warning("Ignoring selection: %s", exc)
        return "", ""
    if entry is None:
        return "", ""
    source = merged_value(entry, changes)
    return _text(source, 'en'), _text(source, 'ja')


def handle_save_proposal(baseline, changes, key, proposed_en, proposed_ja, query, include_proposed,
                         store: Optional[ChangeSetStore] = None):
    changes = changes or {}
    if baseline is None:
        return changes, [], "No data loaded.", gr.update()
    if not key:
        rows, _, choices = render_view(baseline, changes, query, include_proposed)
        return changes, rows, "Select an entry first.", choices

    node = {lang: text for lang, text in (('en', proposed_en), ('ja', proposed_ja)) if text}
    try:
        changes = record_change(changes, key, node)
    except MalformedKeyError as exc:
        rows, _, choices = render_view(baseline, changes, query, include_proposed, selected=key)
        return changes, rows, str(exc), choices

    if store is not None:
        store.save_changes(changes)
    rows, status, choices = render_view(baseline, changes, query, include_proposed, selected=key)
    return changes, rows, status, choices


def handle_show_proposed(baseline, changes):
    """View restricted to entries that have a proposed change."""
    if baseline is None:
        return [], "No data loaded."
    changes = changes or {}
    view = filter_entries(baseline, KeyPathsCriterion(proposed_paths(changes)))
    return build_view_rows(view, changes), status_text(view, changes)


def handle_discard_changes(baseline, query, include_proposed, store: Optional[ChangeSetStore] = None):
    if store is not None:
        store.clear_changes()
    if baseline is None:
        return {}, [], "No data loaded.", gr.update(choices=[], value=None)
    rows, status, choices = render_view(baseline, {}, query, include_proposed)
    return {}, rows, status, choices


def handle_create_pr(changes, title, description, settings: EditorSettings, client=None) -> str:
    if not changes:
        return f"Error creating PR: {EmptyChangeSetError()}"
    if not (title or "").strip():
        return "Please enter a title for the pull request."
    try:
        revision = resolve_revision(settings.revision_file)
        payload, issues = build_pull_request_payload(changes or {}, title.strip(), description or "", revision)
        response = submit_pull_request(settings.api_url, payload, client=client, timeout=settings.request_timeout)
    except TranslationEditorError as exc:
        logger.error("Pull request creation failed: %s", exc)
        return f"Error creating PR: {exc}"

    logger.info("API success response: %s", response)
    message = "SUCCESS: PR creation request sent successfully!"
    if issues:
        message += "\nSome changes could not be placed:\n" + describe_issues(issues)
    return message
