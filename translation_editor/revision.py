"""Repository metadata sent along with a pull request."""
from __future__ import annotations

import json
import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import RevisionError
from .io_utils import read_json_content, write_json_atomic

logger = logging.getLogger(__name__)

_SSH_URL = re.compile(r'^git@github\.com:([^/]+)/([^.]+)(\.git)?$')
_HTTPS_URL = re.compile(r'^https?://github\.com/([^/]+)/([^.]+)(\.git)?$')


@dataclass(frozen=True)
class Revision:
    github_org: str
    repo_name: str
    base_branch: str

    def to_dict(self) -> Dict[str, str]:
        return {'githubOrg': self.github_org, 'repoName': self.repo_name, 'baseBranch': self.base_branch}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Revision':
        try:
            return cls(str(data['githubOrg']), str(data['repoName']), str(data['baseBranch']))
        except (KeyError, TypeError) as exc:
            raise RevisionError(f"Invalid revision data: {data!r}") from exc


def parse_git_url(url: str) -> Optional[Dict[str, str]]:
    """Extract org and repo name from a GitHub SSH or HTTPS remote URL."""
    url = (url or '').strip()
    for pattern in (_SSH_URL, _HTTPS_URL):
        match = pattern.match(url)
        if match:
            return {'githubOrg': match.group(1), 'repoName': match.group(2)}
    logger.warning("Could not parse GitHub org/repo from URL: %s", url)
    return None


def _run_git(args: List[str], cwd=None) -> str:
    try:
        result = subprocess.run(['git', *args], capture_output=True, text=True, cwd=cwd, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise RevisionError(f"Command failed: git {' '.join(args)}: {exc}") from exc
    if result.returncode != 0:
        raise RevisionError(f"Command failed: git {' '.join(args)}\n{result.stderr.strip()}")
    return result.stdout.strip()


def read_revision_from_git(cwd=None) -> Revision:
    base_branch = _run_git(['rev-parse', '--abbrev-ref', 'HEAD'], cwd)
    origin_url = _run_git(['config', '--get', 'remote.origin.url'], cwd)
    repo_info = parse_git_url(origin_url)
    if repo_info is None:
        raise RevisionError(f"Failed to determine GitHub org and repo name from origin URL: {origin_url}")
    return Revision(repo_info['githubOrg'], repo_info['repoName'], base_branch)


def load_revision(path) -> Revision:
    try:
        data = read_json_content(path, expect_object=True)
    except (OSError, ValueError) as exc:
        raise RevisionError(f"Cannot read revision file {path}: {exc}") from exc
    return Revision.from_dict(data)


def write_revision(revision: Revision, path) -> None:
    write_json_atomic(path, revision.to_dict())
    logger.info("Wrote revision data to %s: %s", path, json.dumps(revision.to_dict()))


def resolve_revision(revision_file=None, cwd=None) -> Revision:
    """Read the revision file when given, otherwise ask git."""
    if revision_file is not None:
        return load_revision(revision_file)
    return read_revision_from_git(cwd)
