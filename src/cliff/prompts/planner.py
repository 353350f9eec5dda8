from __future__ import annotations

PLANNER_SYSTEM_PROMPT = (
    "You are CLIFF, an assistant that completes tasks on the user's machine by planning "
    "file, shell and web actions. When asked for JSON you output ONLY raw JSON, optionally "
    "inside a single ```json fenced block, and nothing else."
)

ACTION_CATALOG = """\
Every action is a JSON object with an "action" field (snake_case name below), an integer
"action_idx" (the step number) and the listed fields.

- ask_llm_to_create_file {path}: ask the LLM for a single create_file action for `path`.
- create_file {path, content}: create a file. `content` WILL NOT BE EXPANDED OR PARSED AND
  WILL BE TREATED LITERALLY. No output.
- run_command {command}: run a shell command on the user's machine. Outputs stdout.
- search_web {query}: search the web. Outputs the results.
- read_web_page {url}: read the text of a web page. Outputs the text.
- ask_user {question}: ask the user a question. Outputs the answer.
- delete_file {path}: delete a file. No output.
- ask_llm_to_overwrite_file_contents {path}: ask the LLM for a single
  overwrite_file_contents action for `path`.
- overwrite_file_contents {path, content}: replace a file's contents. `content` WILL NOT BE
  EXPANDED OR PARSED AND WILL BE TREATED LITERALLY. No output.
- ask_llm {prompt}: ask the LLM for a text answer to the user, using the previously executed
  actions and their outputs. Outputs the answer.
- ask_llm_for_plan {instruction, context_sources}: ask the LLM for a sub-plan guided by
  `instruction`; `context_sources` is a list of file paths or URLs. The previously executed
  actions and their outputs are always provided.
- read_file {path}: read a file. Outputs its content.
- find_files {pattern}: find files matching a glob pattern. Outputs the paths.
- ask_llm_to_replace_file_lines {path}: ask the LLM for a single replace_file_lines action
  for `path`.
- replace_file_lines {path, from_line_idx, until_line_idx, replacement_lines}: replace the
  0-based inclusive line range in `path`. `replacement_lines` WILL NOT BE EXPANDED OR PARSED
  AND WILL BE TREATED LITERALLY. No output.
- append_to_file {path, content}: append content to a file. No output.
- move_file {source, destination}: move a file. No output.
- copy_file {source, destination}: copy a file. No output.
- list_directory {path}: list a directory. Outputs the entry names.
- check_path_exists {path}: outputs "true" or "false".

A plan is {"thought": string or null, "steps": [action, ...]}."""

PLAN_PROMPT_TEMPLATE = """\
Based on the following instruction and context, create a step-by-step plan to achieve the goal.
NEVER directly reply with actions create_file, overwrite_file_contents, replace_file_lines
unless asked to. Output the plan ONLY as a JSON object using these actions:

{catalog}

Previous executed actions (action and its output):
{history}

Instruction:
{instruction}

Context:
{context}

Respond ONLY with a valid JSON object."""

ASK_PROMPT_TEMPLATE = """\
Question: {question}

Previous executed actions (action and its output):
{history}"""

ASK_WITH_CONTEXT_TEMPLATE = """\
Question: {question}

Context: {context}"""

CREATE_FILE_PROMPT = (
    "Generate a JSON object for a CreateFile action with path: '{path}'. The JSON object "
    "should have 'action' = \"create_file\", 'action_idx', 'path', and 'content' fields. "
    "Generated `content` will be used LITERALLY and will not be parsed further, so do not "
    "wrap it in any additional structure. Respond ONLY with the JSON object."
)

OVERWRITE_FILE_PROMPT = (
    "Generate a JSON object for an OverwriteFileContents action with path: '{path}'. The JSON "
    "object should have 'action' = \"overwrite_file_contents\", 'action_idx', 'path', and "
    "'content' fields. Generated `content` will be used LITERALLY and will not be parsed "
    "further, so do not wrap it in any additional structure. Respond ONLY with the JSON object."
)

REPLACE_FILE_LINES_PROMPT = (
    "Generate a JSON object for a ReplaceFileLines action with path: '{path}'. The JSON object "
    "should have 'action' = \"replace_file_lines\", 'action_idx', 'path', 'from_line_idx', "
    "'until_line_idx', and 'replacement_lines' fields. Line indices are 0-based and inclusive. "
    "Generated `replacement_lines` will be used LITERALLY and will not be parsed further, so do "
    "not wrap them in any additional structure. Respond ONLY with the JSON object."
)

RECOVERY_INSTRUCTION_TEMPLATE = (
    "Action {action} failed with error: {error}. The history of previous actions is provided. "
    "Generate a new plan to achieve the original objective, taking this failure into account."
)
