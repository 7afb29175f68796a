"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["add-pattern", "remove-pattern", "list-patterns", "provision", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#F45935 bold",
        "command": "#0088ff bold",
    }
)

RED_ORANGE = "\033[38;2;244;89;53m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{RED_ORANGE}
 ██████╗ ███████╗██████╗ ██╗      ██████╗████████╗██╗
 ██╔══██╗██╔════╝██╔══██╗██║     ██╔════╝╚══██╔══╝██║
 ██████╔╝█████╗  ██████╔╝██║     ██║        ██║   ██║
 ██╔══██╗██╔══╝  ██╔═══╝ ██║     ██║        ██║   ██║
 ██║  ██║███████╗██║     ███████╗╚██████╗   ██║   ███████╗
 ╚═╝  ╚═╝╚══════╝╚═╝     ╚══════╝ ╚═════╝   ╚═╝   ╚══════╝
{RESET}"""

WELCOME_TITLE = "replctl - Cross-cluster replication admin"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "replctl> "

LEADER_ROLE_FLAG = "--leader-role"
FOLLOWER_ROLE_FLAG = "--follower-role"

HELP_TEXT = """Available commands:
  add-pattern <connection> <name> <pattern> [--leader-role R --follower-role R]
                                      Register an auto-follow pattern
  remove-pattern <connection> <name> [--leader-role R --follower-role R]
                                      Remove an auto-follow pattern
  list-patterns [connection]          List registered auto-follow patterns
  provision                           Create replication users, roles and role mappings
                                      on the configured leader and follower clusters
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  add-pattern leader1 logs 'logs-*'
  add-pattern leader1 metrics 'metrics-*' --leader-role Role1 --follower-role Role1
  remove-pattern leader1 logs
  list-patterns leader1
  provision"""
