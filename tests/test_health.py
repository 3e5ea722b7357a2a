"""Tests for the project health check."""

import json

from cct.health import print_health_report, run_health_check


def _by_name(checks):
    return {check.name: check for check in checks}


def test_empty_project(project):
    checks = run_health_check(project)

    assert len(checks) == 7
    assert not any(check.passed for check in checks)


def test_complete_project(project):
    github = project / ".github"
    (github / "agents").mkdir(parents=True)
    (github / "agents" / "tutor.agent.md").write_text("")
    (github / "instructions").mkdir()
    (github / "instructions" / "kind.instructions.md").write_text("")
    (github / "prompts").mkdir()
    (github / "prompts" / "ex.prompt.md").write_text("")
    (github / "skills" / "art").mkdir(parents=True)
    (github / "skills" / "art" / "SKILL.md").write_text("")
    (github / "copilot-instructions.md").write_text("")
    (project / "AGENTS.md").write_text("")
    (project / ".vscode").mkdir()
    (project / ".vscode" / "mcp.json").write_text(json.dumps({"servers": {"a": {}, "b": {}}}))

    checks = _by_name(run_health_check(project))

    assert all(check.passed for check in checks.values())
    assert checks[".vscode/mcp.json"].detail == "2 server(s)"
    assert checks[".github/skills"].detail == "1 skill(s)"


def test_skill_without_marker_is_not_counted(project):
    (project / ".github" / "skills" / "art").mkdir(parents=True)

    assert not _by_name(run_health_check(project))[".github/skills"].passed


def test_invalid_mcp_file(project):
    (project / ".vscode").mkdir()
    (project / ".vscode" / "mcp.json").write_text("{oops")

    check = _by_name(run_health_check(project))[".vscode/mcp.json"]

    assert not check.passed
    assert "Failed to parse" in check.detail


def test_legacy_mcp_key_needs_attention(project):
    (project / ".vscode").mkdir()
    (project / ".vscode" / "mcp.json").write_text(json.dumps({"mcpServers": {"a": {}}}))

    check = _by_name(run_health_check(project))[".vscode/mcp.json"]

    assert not check.passed
    assert "servers" in check.detail


def test_report(project, console, output):
    (project / "AGENTS.md").write_text("")

    print_health_report(run_health_check(project), console)

    text = output.getvalue()
    assert "AGENTS.md" in text
    assert "1 of 7 checks passed" in text
