"""
CybORG Viz CLI - Command-line front-end for a game session.

Usage:
    cyborgviz play [--steps N] [--red AGENT] [--blue AGENT]   Interactive game
    cyborgviz step <game_id> <step>                           Print a played step
    cyborgviz end <game_id>                                   End a running game

Common options: --base-url URL, --timeout SECONDS.
"""

import argparse
import sys

from .config import ClientConfig, configure_logging


PLAY_HELP = """Commands:
  n          next step
  p          previous step
  i NODE     show node info
  e          end the game
  q          quit (ends the game first)
  ?          this help"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CybORG Viz - Session client for CybORG games",
        prog="cyborgviz",
    )
    parser.add_argument("--base-url", help="Game server root URL")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Start and play a game interactively")
    play_parser.add_argument("--steps", type=int, help="Maximum number of steps")
    play_parser.add_argument("--red", help="Red agent strategy")
    play_parser.add_argument("--blue", help="Blue agent strategy")

    # Step command
    step_parser = subparsers.add_parser("step", help="Print a step already played")
    step_parser.add_argument("game_id", help="Game identifier")
    step_parser.add_argument("step", type=int, help="Step number")

    # End command
    end_parser = subparsers.add_parser("end", help="End a running game")
    end_parser.add_argument("game_id", help="Game identifier")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    configure_logging(config.log_level, config.log_file)

    if args.command == "play":
        cmd_play(config)
    elif args.command == "step":
        cmd_step(config, args)
    elif args.command == "end":
        cmd_end(config, args)


def load_config(args) -> ClientConfig:
    """Environment settings with command-line overrides."""
    from dataclasses import replace

    config = ClientConfig.from_env()
    overrides = {
        "base_url": args.base_url,
        "timeout": args.timeout,
        "max_steps": getattr(args, "steps", None),
        "red_agent": getattr(args, "red", None),
        "blue_agent": getattr(args, "blue", None),
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def cmd_play(config: ClientConfig, read_command=input):
    """Interactive game loop."""
    from .session import SessionController
    from .view import status_text, observation_info

    controller = SessionController.from_config(config)
    session = controller.session
    print(f"Starting game: red={session.red_agent} blue={session.blue_agent} steps={session.max_steps}")

    try:
        result = controller.start()
        if not result.success:
            print(f"Could not start game: {result.error}")
            sys.exit(1)

        print(status_text(controller.session))
        print(PLAY_HELP)

        while controller.session.is_active():
            try:
                line = read_command("> ").strip()
            except EOFError:
                line = "q"

            command, _, argument = line.partition(" ")
            if command == "n":
                result = controller.next_step()
            elif command == "p":
                result = controller.previous_step()
            elif command == "i":
                print(controller.view.describe_node(argument.strip()) or f"No node named {argument!r}")
                continue
            elif command in ("e", "q"):
                result = controller.end()
                if result.success:
                    print(result.message)
                else:
                    print(f"Could not end game: {result.error}")
                if command == "q":
                    break
                continue
            else:
                print(PLAY_HELP)
                continue

            if not result.success:
                print(f"Error: {result.error}")
            print(status_text(controller.session))
            panel = observation_info(controller.view)
            if panel and controller.session.current_step > 0:
                for side, info in panel.items():
                    print(f"[{side}] {info}")
    except KeyboardInterrupt:
        print()
        if controller.session.is_active():
            result = controller.end()
            print(result.message if result.success else f"Could not end game: {result.error}")
    finally:
        controller.transport.close()


def cmd_step(config: ClientConfig, args):
    """Print a step that was already played."""
    from .transport import SessionTransport
    from .view import GraphViewModel, observation_info

    transport = SessionTransport(config.base_url, timeout=config.timeout)
    result = transport.fetch_historical(args.game_id, args.step)
    transport.close()

    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)

    view = GraphViewModel()
    view.replace(result.value)
    print(f"Game {args.game_id}, step {args.step}")
    for side, info in observation_info(view).items():
        print(f"[{side}] {info}")
    print(f"Nodes: {', '.join(view.node_ids()) or '-'}")


def cmd_end(config: ClientConfig, args):
    """End a game left running on the server."""
    from .transport import SessionTransport

    transport = SessionTransport(config.base_url, timeout=config.timeout)
    result = transport.end(args.game_id)
    transport.close()

    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)
    print(result.value)


if __name__ == "__main__":
    main()
