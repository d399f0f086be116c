#!/usr/bin/env python3
"""
playlist-chat: load a YouTube playlist and ask questions about it.

Usage:
    python main.py serve                    # Start the proxy (holds the API keys)
    python main.py probe                    # Show which connection mode would be used
    python main.py load URL                 # Load and list a playlist
    python main.py ask URL "question"       # Load a playlist, ask one question
    python main.py chat URL                 # Load a playlist, then chat interactively
"""

import argparse
import logging
import sys

from chat.session import ChatSession
from config.settings import load_config
from delivery.output import deliver_playlist, deliver_status, deliver_turn
from llm.factory import create_backend
from models import ConnectionMode
from youtube import ConnectionProbe, PlaylistError, PlaylistLoader, create_transport


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_probe(config) -> ConnectionMode:
    """Resolve the connection mode once. Everything downstream takes it as a parameter."""
    mode = ConnectionProbe(config).run()
    deliver_status(mode)
    return mode


def load_session(config, mode: ConnectionMode, url: str) -> ChatSession:
    """Load the playlist at `url` into a fresh chat session. Exits on failure."""
    loader = PlaylistLoader(create_transport(mode, config), mode, batch_size=config.batch_size)
    try:
        playlist = loader.load(url)
    except PlaylistError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    session = ChatSession(
        create_backend(mode, config),
        context_max_items=config.context_max_items,
        max_tokens=config.max_tokens,
    )
    session.load(playlist)
    return session


def cmd_load(config, url: str):
    mode = cmd_probe(config)
    session = load_session(config, mode, url)
    deliver_playlist(session.playlist)


def cmd_ask(config, url: str, question: str):
    mode = cmd_probe(config)
    session = load_session(config, mode, url)
    turn = session.submit(question)
    if turn:
        deliver_turn(turn)


def cmd_chat(config, url: str):
    """Interactive loop. Empty line is ignored; 'exit' or EOF quits."""
    mode = cmd_probe(config)
    session = load_session(config, mode, url)
    deliver_playlist(session.playlist)
    for turn in session.transcript:
        deliver_turn(turn)

    while True:
        try:
            line = input("\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line.strip().lower() in ("exit", "quit"):
            break
        turn = session.submit(line)
        if turn:
            deliver_turn(turn)


def cmd_serve(config, args):
    """Start the proxy server."""
    from api.server import create_app

    if not config.youtube_api_key:
        print("Warning: YOUTUBE_API_KEY not set. Playlist calls will fail.", file=sys.stderr)

    app = create_app(config)
    print(f"Starting proxy at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.verbose)


def cli():
    parser = argparse.ArgumentParser(
        prog="playlist-chat",
        description="Load a YouTube playlist and chat about it",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    sub.add_parser("probe", parents=[common], help="Show the resolved connection mode")

    load_parser = sub.add_parser("load", parents=[common], help="Load and list a playlist")
    load_parser.add_argument("url", help="Playlist URL (must contain list=...)")

    ask_parser = sub.add_parser("ask", parents=[common], help="Ask one question about a playlist")
    ask_parser.add_argument("url", help="Playlist URL (must contain list=...)")
    ask_parser.add_argument("question", help="Your question")

    chat_parser = sub.add_parser("chat", parents=[common], help="Chat about a playlist")
    chat_parser.add_argument("url", help="Playlist URL (must contain list=...)")

    serve_parser = sub.add_parser("serve", parents=[common], help="Start the proxy server")
    serve_parser.add_argument("--port", type=int, default=5002, help="Port (default 5002)")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Host (default 127.0.0.1)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)
    config = load_config()

    match args.command:
        case "probe":
            cmd_probe(config)
        case "load":
            cmd_load(config, args.url)
        case "ask":
            cmd_ask(config, args.url, args.question)
        case "chat":
            cmd_chat(config, args.url)
        case "serve":
            cmd_serve(config, args)
        case _:
            parser.print_help()


if __name__ == "__main__":
    cli()
