"""
Artifact Assembler
Turns a SourcePlugin into the Bundle one target writes.

- commands -> prompts (rewritten, front matter: description, argument-hint)
- agents   -> generated skills (front matter: name, description)
- skills   -> pass-through directories
- MCP      -> target-shaped server map
"""

from typing import Iterable

from ..utils import format_frontmatter
from .mcp import McpShape, convert_mcp_servers
from .names import NameRegistry, normalize_name, sanitize_description, unique_name
from .rewriter import ContentRewriter
from .types import (
    Bundle,
    ClaudeAgent,
    ClaudeCommand,
    ExtensionFile,
    GeneratedArtifact,
    PassthroughDir,
    SourcePlugin,
)


class ArtifactAssembler:
    """Builds one Bundle per call; the name registry lives only for that call."""

    def __init__(
        self,
        rewriter: ContentRewriter,
        mcp_shape: McpShape,
        extensions: Iterable[ExtensionFile] = (),
    ) -> None:
        self.rewriter = rewriter
        self.mcp_shape = mcp_shape
        self.extensions = list(extensions)

    def assemble(self, plugin: SourcePlugin) -> Bundle:
        registry = NameRegistry.seeded(skill.name for skill in plugin.skills)

        prompts = [
            self.convert_command(command, registry)
            for command in plugin.commands
            if not command.disable_model_invocation
        ]
        generated_skills = [self.convert_agent(agent, registry) for agent in plugin.agents]

        server_map = None
        if plugin.mcp_servers:
            server_map = convert_mcp_servers(plugin.mcp_servers, self.mcp_shape)

        return Bundle(
            prompts=prompts,
            skill_dirs=[PassthroughDir(skill.name, skill.source_dir) for skill in plugin.skills],
            generated_skills=generated_skills,
            extensions=list(self.extensions),
            server_map=server_map,
        )

    def convert_command(self, command: ClaudeCommand, registry: NameRegistry) -> GeneratedArtifact:
        name = unique_name(normalize_name(command.name), registry)
        frontmatter = {
            "description": command.description,
            "argument-hint": command.argument_hint,
        }
        body = self.rewriter.rewrite(command.body).strip()
        return GeneratedArtifact(name=name, content=format_frontmatter(frontmatter, body))

    def convert_agent(self, agent: ClaudeAgent, registry: NameRegistry) -> GeneratedArtifact:
        name = unique_name(normalize_name(agent.name), registry)
        description = sanitize_description(
            agent.description or f"Converted from Claude agent {agent.name}"
        )
        frontmatter = {"name": name, "description": description}
        return GeneratedArtifact(name=name, content=format_frontmatter(frontmatter, agent_skill_body(agent)))


def agent_skill_body(agent: ClaudeAgent) -> str:
    sections = []
    if agent.capabilities:
        bullets = "\n".join(f"- {capability}" for capability in agent.capabilities)
        sections.append(f"## Capabilities\n{bullets}")

    body = agent.body.strip()
    sections.append(body if body else f"Instructions converted from the {agent.name} agent.")
    return "\n\n".join(sections)
