from generation.document_builder import build_operations
from generation.markdown_renderer import render_markdown
from generation.schemas import (
    AssignmentRecord,
    HeadingToken,
    ParagraphToken,
    RenderDefaults,
    SetListBullets,
    SetParagraphStyle,
    SpaceToken,
    Task,
)
from generation.tokenizer import tokenize


def _record(**overrides) -> AssignmentRecord:
    data = dict(
        title="Binary Trees",
        deadline="2025-03-01",
        total_marks_weightage=100,
        evaluation_criteria="Correctness and style",
        number_of_tasks=2,
        tasks=[
            Task(description="Implement insert", weightage=40),
            Task(description="Implement delete", weightage="60"),
        ],
    )
    data.update(overrides)
    return AssignmentRecord(**data)


def test_full_record_layout():
    expected = "\n\n".join(
        [
            "# Binary Trees",
            "## Deadline",
            "2025-03-01",
            "## Number of Tasks",
            "2",
            "## Tasks",
            "Task 1: Implement insert (Weightage: 40 marks)",
            "Task 2: Implement delete (Weightage: 60 marks)",
            "## Total Weightage Marks",
            "100",
            "## Evaluation Criteria",
            "Correctness and style",
        ]
    )
    assert render_markdown(_record()) == expected


def test_render_is_deterministic():
    record = _record()
    assert render_markdown(record) == render_markdown(record)
    assert render_markdown(record) == render_markdown(_record())


def test_empty_input_renders_placeholders():
    defaults = RenderDefaults()
    markdown = render_markdown({})

    assert markdown.startswith(f"# {defaults.title}")
    assert defaults.deadline in markdown
    assert f"## Number of Tasks\n\n{defaults.number_of_tasks}" in markdown
    assert f"## Total Weightage Marks\n\n{defaults.total_marks_weightage}" in markdown
    assert defaults.evaluation_criteria in markdown
    assert markdown.count("Task ") >= len(defaults.placeholder_tasks)


def test_number_of_tasks_falls_back_to_task_list_length():
    markdown = render_markdown({"tasks": [{"description": "a"}, {"description": "b"}, {}]})

    assert "## Number of Tasks\n\n3" in markdown
    assert "Task 3: No description provided (Weightage: Not specified marks)" in markdown


def test_defaults_can_be_overridden():
    defaults = RenderDefaults(title="Sans titre", placeholder_tasks=[])
    markdown = render_markdown({"numberOfTasks": 0}, defaults)

    assert markdown.startswith("# Sans titre")
    assert "Task 1" not in markdown


def test_garbage_input_does_not_raise():
    assert render_markdown(None).startswith("# Untitled Assignment")
    assert "Task 1: No description provided" in render_markdown({"tasks": ["oops"]})


def test_field_values_stay_inside_their_block():
    markdown = render_markdown(
        {
            "title": "Trees\n\nand graphs",
            "deadline": "- tomorrow",
            "numberOfTasks": 2,
            "tasks": [
                {"description": "x\n\n# injected", "weightage": 5},
                {"description": "first line\n1. second\n> quoted", "weightage": 5},
            ],
        }
    )

    tokens = [t for t in tokenize(markdown) if not isinstance(t, SpaceToken)]
    assert [t.text for t in tokens if isinstance(t, HeadingToken)] == [
        "Trees and graphs",
        "Deadline",
        "Number of Tasks",
        "Tasks",
        "Total Weightage Marks",
        "Evaluation Criteria",
    ]
    assert all(isinstance(t, (HeadingToken, ParagraphToken)) for t in tokens)
    paragraphs = [t.text for t in tokens if isinstance(t, ParagraphToken)]
    assert "- tomorrow" in paragraphs
    assert "Task 1: x # injected (Weightage: 5 marks)" in paragraphs
    assert "Task 2: first line\n1. second\n> quoted (Weightage: 5 marks)" in paragraphs

    operations = build_operations(markdown).operations
    assert not any(isinstance(op, SetListBullets) for op in operations)
    assert sum(isinstance(op, SetParagraphStyle) for op in operations) == 6


def test_decimal_values_are_not_escaped():
    markdown = render_markdown({"totalMarksWeightage": "10.5"})
    assert "## Total Weightage Marks\n\n10.5" in markdown
