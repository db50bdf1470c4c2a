import logging
from functools import partial

import gradio as gr

from translation_editor.config import load_settings
from translation_editor.handlers import (
    TABLE_HEADERS,
    handle_create_pr,
    handle_discard_changes,
    handle_save_proposal,
    handle_search,
    handle_select_path,
    handle_show_proposed,
    load_baseline,
)
from translation_editor.storage import ChangeSetStore

settings = load_settings()
logging.basicConfig(
    level=settings.effective_log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

store = ChangeSetStore(settings.storage_dir, settings.app_identifier)
baseline = load_baseline(settings)
initial_changes = store.load_changes()
initial_query = store.load_search_query()

# --- UI Definition ---
with gr.Blocks(title="Translation Editor") as demo:
    gr.Markdown("# Translation Editor")
    gr.Markdown("Search the translation catalogue, propose changes, and submit them as a pull request.")

    # State
    baseline_state = gr.State(value=baseline)
    changes_state = gr.State(value=initial_changes)

    with gr.Tab("Edit"):
        with gr.Row():
            # Left Panel: Search & Results
            with gr.Column(scale=2):
                gr.Markdown("### 1. Search")
                search_box = gr.Textbox(label="Search", placeholder="Search...", value=initial_query)
                include_proposed = gr.Checkbox(label="Also show proposed changes", value=False)
                status_bar = gr.Textbox(label="Status", interactive=False)
                results_table = gr.Dataframe(
                    headers=TABLE_HEADERS,
                    datatype=["str"] * len(TABLE_HEADERS),
                    col_count=(len(TABLE_HEADERS), "fixed"),
                    interactive=False,
                    wrap=True,
                    label="Entries",
                )

            # Right Panel: Proposal
            with gr.Column(scale=1):
                gr.Markdown("### 2. Propose a change")
                path_selector = gr.Dropdown(label="Entry", choices=[], value=None, interactive=True)
                proposed_en = gr.Textbox(label="Proposed en", lines=3)
                proposed_ja = gr.Textbox(label="Proposed ja", lines=3)
                gr.Markdown("Clear both boxes and save to withdraw a proposal.")
                save_btn = gr.Button("Save Proposal", variant="primary")
                discard_btn = gr.Button("Discard All Proposals", variant="stop")

        search_inputs = [baseline_state, changes_state, search_box, include_proposed]
        search_outputs = [results_table, status_bar, path_selector]

        search_box.submit(fn=partial(handle_search, store=store), inputs=search_inputs, outputs=search_outputs)
        include_proposed.change(fn=partial(handle_search, store=store), inputs=search_inputs, outputs=search_outputs)

        path_selector.change(
            fn=handle_select_path,
            inputs=[baseline_state, changes_state, path_selector],
            outputs=[proposed_en, proposed_ja],
        )

        save_btn.click(
            fn=partial(handle_save_proposal, store=store),
            inputs=[baseline_state, changes_state, path_selector, proposed_en, proposed_ja, search_box, include_proposed],
            outputs=[changes_state, results_table, status_bar, path_selector],
        )

        discard_btn.click(
            fn=partial(handle_discard_changes, store=store),
            inputs=[baseline_state, search_box, include_proposed],
            outputs=[changes_state, results_table, status_bar, path_selector],
        )

    with gr.Tab("Finalize"):
        gr.Markdown("### 1. Review proposed changes")
        review_btn = gr.Button("Show Proposed Changes")
        review_status = gr.Textbox(label="Status", interactive=False)
        review_table = gr.Dataframe(
            headers=TABLE_HEADERS,
            datatype=["str"] * len(TABLE_HEADERS),
            col_count=(len(TABLE_HEADERS), "fixed"),
            interactive=False,
            wrap=True,
            label="Proposed Changes",
        )

        gr.Markdown("### 2. Create pull request")
        pr_title = gr.Textbox(label="Title", placeholder="Enter PR title...")
        pr_description = gr.Textbox(label="Description", placeholder="Enter PR description (optional)...", lines=5)
        submit_btn = gr.Button("Create Pull Request", variant="primary")
        submit_status = gr.Textbox(label="Submission Status", interactive=False)

        review_btn.click(
            fn=handle_show_proposed,
            inputs=[baseline_state, changes_state],
            outputs=[review_table, review_status],
        )

        submit_btn.click(
            fn=partial(handle_create_pr, settings=settings),
            inputs=[changes_state, pr_title, pr_description],
            outputs=[submit_status],
        )

    demo.load(fn=handle_search, inputs=search_inputs, outputs=search_outputs)

if __name__ == "__main__":
    demo.launch()
