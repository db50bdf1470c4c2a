"""Core logic for the Translation Editor.

The Gradio UI lives in `app.py`. This package contains the pieces it uses:
- path keys (`paths`), flattening (`flattening`) and the flat index (`flat_index`)
- filtering of the baseline index into views (`filtering`)
- rebuilding a nested tree from a change-set (`reconstruct`)
- local storage, settings and pull-request submission around them
"""
from .errors import (
    ConfigurationError,
    EmptyChangeSetError,
    MalformedKeyError,
    RevisionError,
    SubmissionError,
    TranslationEditorError,
)
from .filtering import (
    AllCriterion,
    CombinedCriterion,
    KeyPathsCriterion,
    TextCriterion,
    criterion_from_dict,
    criterion_from_search,
    filter_entries,
)
from .flat_index import Entry, FlatIndex
from .flattening import build_baseline, flatten_tree
from .paths import from_key, to_key
from .reconstruct import ReconstructionIssue, reconstruct_tree

__version__ = "0.1.0"
