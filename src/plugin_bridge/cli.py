import argparse
import logging
import sys
from typing import List, Optional

import questionary
from questionary import Style

from .config import config_path, load_config, resolve_claude_home
from .core.converter import target_registry
from .errors import BridgeError, ConfigError
from .loader import load_claude_home, load_claude_plugin
from .services import display_outcomes, run_sync
from .utils import Colors

CUSTOM_STYLE = Style([
    ('qmark', 'fg:#00d4ff bold'),
    ('question', 'bold'),
    ('answer', 'fg:#00d4ff bold'),
    ('pointer', 'fg:#00d4ff bold'),
    ('highlighted', 'fg:#00d4ff bold bg:default'),
    ('selected', 'fg:#00d4ff bold bg:default'),
    ('checkbox', 'fg:#888888'),
    ('checkbox-selected', 'fg:#00d4ff bold'),
])


def _select_targets_interactive() -> Optional[List[str]]:
    """Ask which targets to sync. Returns None when the user cancels."""
    choices = [
        questionary.Choice(t.format_info.checkbox_label, value=t.name, checked=(t.name == "pi"))
        for t in target_registry.all()
    ]
    selected = questionary.checkbox(
        "Select sync targets:",
        choices=choices,
        style=CUSTOM_STYLE,
        instruction="Space=toggle, Enter=confirm",
    ).ask()
    if not selected:
        return None

    confirm = questionary.confirm(
        f"Sync to {', '.join(selected)}?",
        default=True,
        style=CUSTOM_STYLE,
    ).ask()
    return selected if confirm else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plugin Bridge - Claude plugin and config converter")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    convert_parser = subparsers.add_parser("convert", help="Convert a Claude plugin directory")
    convert_parser.add_argument("plugin", help="Plugin root (contains commands/, agents/, skills/)")
    convert_parser.add_argument("--to", default="pi", help="Target format (default: pi)")
    convert_parser.add_argument("--output", "-o", default=".", help="Output root (default: current directory)")
    convert_parser.add_argument("--copy-skills", action="store_true", help="Copy skill directories instead of linking")

    sync_parser = subparsers.add_parser("sync", help="Sync Claude home (~/.claude) to other agent tools")
    sync_parser.add_argument("--target", "-t", action="append", help="Target name or 'all' (repeatable)")
    sync_parser.add_argument("--claude-home", default=None, help="Path to Claude home (default: ~/.claude)")
    sync_parser.add_argument("--output", "-o", default=None, help="Override the home directory of the single selected target")
    sync_parser.add_argument("--copy-skills", action="store_true", help="Copy skill directories instead of linking")
    sync_parser.add_argument("--no-interactive", action="store_true", help="Disable interactive target selection")

    subparsers.add_parser("list", help="List supported targets")
    return parser


def main():
    """Main entry point."""
    try:
        sys.exit(_main_inner())
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Cancelled.{Colors.ENDC}")
        sys.exit(130)


def _main_inner(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if args.command == "list":
        print(f"{Colors.BLUE}📂 Supported targets:{Colors.ENDC}")
        for target in target_registry.all():
            info = target.format_info
            print(f"  - {Colors.YELLOW}{info.name}{Colors.ENDC}: {info.display_name} ({info.default_home}, {info.status})")
        return 0

    if args.command not in ("convert", "sync"):
        parser.print_help()
        return 0

    try:
        config = load_config()
        link_skills = False if args.copy_skills else None

        if args.command == "convert":
            print(f"{Colors.HEADER}🏗️  Converting {args.plugin} to {args.to}...{Colors.ENDC}")
            plugin = load_claude_plugin(args.plugin)
            outcomes = run_sync(plugin, [args.to], config, output=args.output, link_skills=link_skills)
        else:
            claude_home = resolve_claude_home(args.claude_home)
            if claude_home is None:
                print(f"{Colors.RED}❌ Error: No Claude home found. Pass --claude-home.{Colors.ENDC}")
                return 1

            target_names = args.target
            if not target_names:
                if args.no_interactive or not sys.stdin.isatty():
                    target_names = ["all"]
                else:
                    target_names = _select_targets_interactive()
                    if not target_names:
                        print(f"{Colors.YELLOW}Cancelled.{Colors.ENDC}")
                        return 0

            plugin = load_claude_home(claude_home)
            print(f"{Colors.HEADER}🔄 Syncing {len(plugin.skills)} skills, "
                  f"{len(plugin.mcp_servers or {})} MCP servers from {claude_home}...{Colors.ENDC}")
            outcomes = run_sync(plugin, target_names, config, output=args.output, link_skills=link_skills)
    except ConfigError as e:
        print(f"{Colors.RED}❌ {e}{Colors.ENDC}")
        print(f"   Fix or remove the config file at {config_path()}")
        return 1
    except BridgeError as e:
        print(f"{Colors.RED}❌ {e}{Colors.ENDC}")
        return 1

    display_outcomes(outcomes)
    return 0 if all(outcome.ok for outcome in outcomes) else 1


if __name__ == "__main__":
    main()
