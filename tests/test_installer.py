"""Tests for installing single components."""

import json
import os
import stat

import pytest

from cct.components import ComponentKind, ComponentRequest

AGENT = ComponentRequest(ComponentKind.AGENT, "beginner-tutors/python-basics-tutor")
COPILOT = ComponentRequest(ComponentKind.COPILOT_INSTRUCTIONS, "beginner-friendly")
WORKSPACE = ComponentRequest(ComponentKind.WORKSPACE_AGENTS, "learning-workspace")


def _files(directory):
    return sorted(p.relative_to(directory).as_posix() for p in directory.rglob("*") if p.is_file())


class TestFileComponents:
    def test_agent_is_written_without_category(self, remote, project, make_installer, output):
        remote.add_component("agents/beginner-tutors/python-basics-tutor.agent.md", "# Tutor")

        result = make_installer().install(AGENT)

        assert result.success
        target = project / ".github" / "agents" / "python-basics-tutor.agent.md"
        assert result.installed_path == target
        assert target.read_text() == "# Tutor"
        assert "Installed agent 'beginner-tutors/python-basics-tutor'" in output.getvalue()

    @pytest.mark.parametrize(
        "kind,remote_path,local_path",
        [
            (
                ComponentKind.INSTRUCTION,
                "instructions/always-on/beginner-friendly.instructions.md",
                ".github/instructions/beginner-friendly.instructions.md",
            ),
            (
                ComponentKind.PROMPT,
                "prompts/always-on/beginner-friendly.prompt.md",
                ".github/prompts/beginner-friendly.prompt.md",
            ),
        ],
    )
    def test_instruction_and_prompt(self, remote, project, make_installer, kind, remote_path, local_path):
        remote.add_component(remote_path, "content")

        result = make_installer().install(ComponentRequest(kind, "always-on/beginner-friendly"))

        assert result.success
        assert (project / local_path).read_text() == "content"

    def test_not_found_writes_nothing(self, project, make_installer, output):
        result = make_installer().install(AGENT)

        assert not result.success
        assert result.error == "not found"
        assert _files(project) == []
        text = output.getvalue()
        assert "Agent 'beginner-tutors/python-basics-tutor' not found" in text
        assert "cct --list" in text

    def test_server_error_is_reported(self, remote, project, make_installer, output):
        remote.add_component("agents/beginner-tutors/python-basics-tutor.agent.md", "", status=500)

        result = make_installer().install(AGENT)

        assert not result.success
        assert "HTTP 500" in result.error
        assert "Error installing agent" in output.getvalue()
        assert _files(project) == []

    def test_existing_agent_is_replaced_without_asking(self, remote, project, make_installer):
        target = project / ".github" / "agents" / "python-basics-tutor.agent.md"
        target.parent.mkdir(parents=True)
        target.write_text("old")
        remote.add_component("agents/beginner-tutors/python-basics-tutor.agent.md", "new")

        def fail(_message):
            raise AssertionError("should not ask")

        assert make_installer(confirm=fail).install(AGENT).success
        assert target.read_text() == "new"


class TestSingletons:
    @pytest.fixture
    def existing(self, project):
        target = project / ".github" / "copilot-instructions.md"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"original\n")
        return target

    @pytest.fixture(autouse=True)
    def published(self, remote):
        remote.add_component("copilot-instructions/beginner-friendly.md", "template")
        remote.add_component("workspace-agents/learning-workspace.md", "# Agents")

    def test_new_file_is_written(self, project, make_installer):
        assert make_installer().install(COPILOT).success
        assert (project / ".github" / "copilot-instructions.md").read_text() == "template"

    def test_workspace_agents_goes_to_project_root(self, project, make_installer):
        result = make_installer().install(WORKSPACE)

        assert result.installed_path == project / "AGENTS.md"
        assert (project / "AGENTS.md").read_text() == "# Agents"

    def test_yes_overwrites(self, existing, make_installer):
        assert make_installer(assume_yes=True).install(COPILOT).success
        assert existing.read_text() == "template"

    def test_confirmed_overwrite(self, existing, make_installer):
        assert make_installer(confirm=lambda _m: True).install(COPILOT).success
        assert existing.read_text() == "template"

    def test_declined_overwrite_keeps_file(self, remote, existing, make_installer, output):
        result = make_installer(confirm=lambda _m: False).install(COPILOT)

        assert not result.success
        assert result.skipped
        assert existing.read_bytes() == b"original\n"
        assert "Kept existing copilot-instructions.md" in output.getvalue()
        assert remote.requested == []

    def test_no_prompt_defaults_to_keeping(self, existing, make_installer):
        result = make_installer().install(COPILOT)

        assert result.skipped
        assert existing.read_bytes() == b"original\n"


class TestSkills:
    SKILL = ComponentRequest(ComponentKind.SKILL, "creative-design/algorithmic-art")

    def test_skill_directory_is_written(self, remote, project, make_installer):
        remote.add_skill(
            self.SKILL.identifier,
            {"SKILL.md": "# Art", "scripts/render.sh": "echo", "templates/viewer.html": "<html/>"},
        )

        result = make_installer().install(self.SKILL)

        skill_dir = project / ".github" / "skills" / "algorithmic-art"
        assert result.success
        assert result.files_written == 3
        assert result.installed_path == skill_dir
        assert _files(skill_dir) == ["SKILL.md", "scripts/render.sh", "templates/viewer.html"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_scripts_are_executable(self, remote, project, make_installer):
        remote.add_skill(self.SKILL.identifier, {"SKILL.md": "# Art", "gen.py": "pass"})

        make_installer().install(self.SKILL)

        script = project / ".github" / "skills" / "algorithmic-art" / "gen.py"
        assert script.stat().st_mode & stat.S_IXUSR

    def test_missing_marker_writes_nothing(self, remote, project, make_installer, output):
        remote.add_skill(self.SKILL.identifier, {"README.md": "readme"})

        result = make_installer().install(self.SKILL)

        assert not result.success
        assert "SKILL.md" in result.error
        assert _files(project) == []

    def test_unknown_skill_prints_hint(self, make_installer, output):
        result = make_installer().install(self.SKILL)

        assert result.error == "not found"
        assert "creative-design/algorithmic-art" in output.getvalue()
        assert "Available categories" in output.getvalue()

    def test_listing_cannot_escape_the_project(self, remote, project, make_installer):
        remote.add_skill(self.SKILL.identifier, {"SKILL.md": "# Art"})
        root_url = remote.source.contents_url(f"skills/{self.SKILL.identifier}")
        remote.add("https://downloads.example.test/escaped.txt", "escaped")
        listing = json.loads(remote.responses[root_url][1])
        listing.append(
            {"name": "../../../escaped.txt", "type": "file", "download_url": "https://downloads.example.test/escaped.txt"}
        )
        remote.add(root_url, json.dumps(listing))

        result = make_installer().install(self.SKILL)

        assert not result.success
        assert not (project / "escaped.txt").exists()
        assert _files(project) == []

    def test_file_limit_from_options(self, remote, project, make_installer):
        remote.add_skill(self.SKILL.identifier, {"SKILL.md": "x", "a.md": "a", "b.md": "b"})

        result = make_installer(max_skill_files=2).install(self.SKILL)

        assert not result.success
        assert _files(project) == []


class TestMcp:
    def test_install_twice_merges(self, remote, project, make_installer):
        remote.add_component(
            "mcps/web-fetch.json",
            json.dumps({"mcpServers": {"fetch": {"command": "uvx", "description": "Fetch pages"}}}),
        )
        remote.add_component(
            "mcps/memory-integration.json",
            json.dumps({"mcpServers": {"memory": {"command": "npx"}}}),
        )
        installer = make_installer()

        installer.install(ComponentRequest(ComponentKind.MCP, "web-fetch"))
        result = installer.install(ComponentRequest(ComponentKind.MCP, "memory-integration"))

        assert result.installed_path == project / ".vscode" / "mcp.json"
        data = json.loads((project / ".vscode" / "mcp.json").read_text())
        assert data == {"servers": {"fetch": {"command": "uvx"}, "memory": {"command": "npx"}}}

    def test_invalid_payload_fails(self, remote, project, make_installer):
        remote.add_component("mcps/web-fetch.json", "not json")

        result = make_installer().install(ComponentRequest(ComponentKind.MCP, "web-fetch"))

        assert not result.success
        assert not (project / ".vscode" / "mcp.json").exists()


class TestDryRun:
    def test_nothing_is_fetched_or_written(self, remote, project, make_installer, output):
        installer = make_installer(dry_run=True)

        for request in (AGENT, COPILOT, ComponentRequest(ComponentKind.MCP, "web-fetch")):
            result = installer.install(request)
            assert result.success
            assert result.files_written == 0

        assert remote.requested == []
        assert _files(project) == []
        assert "-> .github/agents/python-basics-tutor.agent.md" in output.getvalue()


def test_learning_path_requests_are_rejected(make_installer):
    with pytest.raises(ValueError):
        make_installer().install(ComponentRequest(ComponentKind.LEARNING_PATH, "python-beginner"))


def test_verbose_prints_urls(remote, make_installer, output):
    remote.add_component("agents/beginner-tutors/python-basics-tutor.agent.md", "# Tutor")

    make_installer(verbose=True).install(AGENT)

    assert "Fetching https://raw.githubusercontent.com/" in output.getvalue()
