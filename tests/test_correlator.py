import pytest

from pr_annotator.correlator import correlate, normalize_path
from pr_annotator.errors import PatchUnresolved, ReferenceUnresolved
from pr_annotator.filtering import should_include
from pr_annotator.models import ChangedFile, Finding, Location

WORKSPACE = "/workspace"
SHA = "abc123"


def make_finding(filename: str, start_line: int, end_line: int | None = None, rule_id: str = "G101") -> Finding:
    return Finding(
        rule_id=rule_id,
        rule_description="Look for hard coded credentials",
        rule_provider="gosec",
        link="https://example.com/rules/" + rule_id,
        location=Location(
            filename=filename,
            start_line=start_line,
            end_line=end_line if end_line is not None else start_line,
        ),
        description="Potential hardcoded credentials",
        severity="HIGH",
    )


def make_file(filename: str, patch: str = "@@ -10,5 +10,5 @@\n", sha: str = SHA) -> ChangedFile:
    return ChangedFile(
        filename=filename,
        patch=patch,
        contents_url=f"https://api.github.com/repos/acme/app/contents/{filename}?ref={sha}",
    )


@pytest.mark.parametrize(
    ("line", "expected"),
    [(9, False), (10, False), (11, True), (14, True), (15, False), (16, False)],
)
def test_should_include_is_exclusive_at_both_ends(line, expected):
    assert should_include(line, 10, 5) is expected


@pytest.mark.parametrize(
    ("path", "workspace", "expected"),
    [
        ("/workspace/pkg/file.go", "/workspace", "pkg/file.go"),
        ("/workspace/pkg/file.go", "/workspace/", "pkg/file.go"),
        ("pkg/file.go", "/workspace", "pkg/file.go"),
        ("/other/workspace/pkg/file.go", "/workspace", "/other/workspace/pkg/file.go"),
        ("/workspace/pkg/file.go", "", "/workspace/pkg/file.go"),
        ("/workspace/pkg/file.go", None, "/workspace/pkg/file.go"),
    ],
)
def test_normalize_path(path, workspace, expected):
    assert normalize_path(path, workspace) == expected


def test_finding_inside_hunk_is_annotated():
    annotations = correlate(
        [make_finding("/workspace/pkg/file.go", 12, 13)],
        [make_file("pkg/file.go")],
        WORKSPACE,
    )

    assert len(annotations) == 1
    annotation = annotations[0]
    assert annotation.filename == "pkg/file.go"
    assert annotation.start_line == 12
    assert annotation.end_line == 13
    assert annotation.position == 2
    assert annotation.sha == SHA
    assert annotation.code == "G101"
    assert annotation.description == "Potential hardcoded credentials"
    assert annotation.provider == "gosec"


@pytest.mark.parametrize("line", [10, 15])
def test_findings_on_hunk_boundaries_are_dropped(line):
    annotations = correlate(
        [make_finding("/workspace/pkg/file.go", line)],
        [make_file("pkg/file.go")],
        WORKSPACE,
    )
    assert annotations == []


def test_end_line_does_not_gate_inclusion():
    annotations = correlate(
        [make_finding("/workspace/pkg/file.go", 11, 400)],
        [make_file("pkg/file.go")],
        WORKSPACE,
    )
    assert [item.end_line for item in annotations] == [400]


def test_finding_outside_diff_is_silently_dropped():
    annotations = correlate(
        [make_finding("/workspace/pkg/untouched.go", 12)],
        [make_file("pkg/file.go", patch="")],
        WORKSPACE,
    )
    assert annotations == []


def test_finding_in_later_hunk_is_not_matched():
    patch = "@@ -1,3 +1,3 @@\n a\n-b\n+c\n@@ -50,3 +50,3 @@\n x\n-y\n+z\n"
    annotations = correlate(
        [make_finding("/workspace/pkg/file.go", 51)],
        [make_file("pkg/file.go", patch=patch)],
        WORKSPACE,
    )
    assert annotations == []


def test_unparseable_patch_aborts_whole_correlation():
    findings = [
        make_finding("/workspace/pkg/ok.go", 12),
        make_finding("/workspace/pkg/binary.go", 12),
    ]
    files = [make_file("pkg/ok.go"), make_file("pkg/binary.go", patch="Binary files differ")]

    with pytest.raises(PatchUnresolved):
        correlate(findings, files, WORKSPACE)


def test_missing_ref_aborts_whole_correlation():
    broken = ChangedFile(
        filename="pkg/file.go",
        patch="@@ -10,5 +10,5 @@\n",
        contents_url="https://api.github.com/repos/acme/app/contents/pkg/file.go",
    )
    with pytest.raises(ReferenceUnresolved):
        correlate([make_finding("/workspace/pkg/file.go", 12)], [broken], WORKSPACE)


def test_output_order_follows_findings_then_files():
    findings = [
        make_finding("/workspace/b.go", 12, rule_id="B1"),
        make_finding("/workspace/a.go", 13, rule_id="A1"),
        make_finding("/workspace/b.go", 11, rule_id="B2"),
    ]
    files = [make_file("a.go", sha="sha-a"), make_file("b.go", sha="sha-b")]

    annotations = correlate(findings, files, WORKSPACE)

    assert [(item.code, item.filename, item.position, item.sha) for item in annotations] == [
        ("B1", "b.go", 2, "sha-b"),
        ("A1", "a.go", 3, "sha-a"),
        ("B2", "b.go", 1, "sha-b"),
    ]


def test_correlation_is_idempotent_and_does_not_mutate_findings():
    findings = [make_finding("/workspace/pkg/file.go", line) for line in range(8, 17)]
    files = [make_file("pkg/file.go")]

    first = correlate(findings, files, WORKSPACE)
    second = correlate(findings, files, WORKSPACE)

    assert first == second
    assert [item.start_line for item in first] == [11, 12, 13, 14]
    assert all(item.position == item.start_line - 10 for item in first)
    assert findings[0].location.filename == "/workspace/pkg/file.go"
