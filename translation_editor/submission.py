"""Build and send pull-request requests for a finalized change-set."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from .errors import EmptyChangeSetError, SubmissionError
from .reconstruct import ReconstructionIssue, reconstruct_tree
from .revision import Revision

logger = logging.getLogger(__name__)


def build_pull_request_payload(
    changes: Mapping[str, Any],
    title: str,
    description: str,
    revision: Revision,
) -> Tuple[Dict[str, Any], List[ReconstructionIssue]]:
    """Reconstruct the change-set and wrap it with the PR metadata.

    Returns the payload and any reconstruction issues. Raises
    ``EmptyChangeSetError`` when there is nothing to submit.
    """
    if not changes:
        raise EmptyChangeSetError()

    tree, issues = reconstruct_tree(changes)
    payload = dict(revision.to_dict())
    payload.update({
        'prTitle': title,
        'prBody': description,
        'proposedChanges': tree,
    })
    return payload, issues


def submit_pull_request(
    api_url: str,
    payload: Dict[str, Any],
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> Any:
    """POST ``payload`` as JSON and return the decoded response body."""
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=httpx.Timeout(timeout))
    logger.info("Sending pull request %r to %s", payload.get('prTitle'), api_url)
    try:
        response = client.post(api_url, json=payload)
    except httpx.HTTPError as err:
        raise SubmissionError(f"Failed to send request to API: {err}") from err
    finally:
        if owns_client:
            client.close()

    if response.status_code >= 400:
        body = response.text
        logger.error("API error response: %s %s", response.status_code, body)
        raise SubmissionError(
            f"Server responded with status: {response.status_code} - {body}",
            status_code=response.status_code,
            body=body,
        )

    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


def describe_issues(issues: List[ReconstructionIssue]) -> str:
    return "\n".join(f"- {issue.message}" for issue in issues)
