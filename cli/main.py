"""Main CLI entry point for mailcompose."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from mailcompose.config.config_loader import ConfigLoader
from mailcompose.exceptions import EmailError
from mailcompose.services.composing.message_builder import MessageBuilder


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from --verbose or MAILCOMPOSE_LOG_LEVEL."""
    log_level = "DEBUG" if verbose else os.getenv("MAILCOMPOSE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def parse_header(raw: str) -> tuple:
    """
    Split a NAME=VALUE header argument.

    Args:
        raw: Header argument from the command line

    Returns:
        Tuple of (name, value)

    Raises:
        argparse.ArgumentTypeError: If there is no "=" separator
    """
    name, sep, value = raw.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Header must be NAME=VALUE: {raw}")
    return name.strip(), value.strip()


def create_builder(args) -> MessageBuilder:
    """
    Create a builder from config file and transport options.

    Args:
        args: Parsed command-line arguments

    Returns:
        MessageBuilder with transport settings applied
    """
    config_loader = ConfigLoader(args.config)
    builder = MessageBuilder.from_config(config_loader.load_app_config())

    if args.host:
        builder.set_host_name(args.host)
    if args.port:
        builder.set_smtp_port(args.port)
    if args.ssl:
        builder.set_ssl_on_connect(True)
    if args.starttls:
        builder.set_start_tls_enabled(True)
    if args.user or args.password:
        builder.set_authentication(args.user, args.password)
    if args.timeout is not None:
        builder.set_socket_connection_timeout(args.timeout)

    return builder


def cmd_compose(args) -> str:
    """Compose command: build a message and return it as text."""
    builder = create_builder(args)

    if args.sender:
        builder.set_from(args.sender, args.sender_name)
    for address in args.to or []:
        builder.add_to(address)
    for address in args.cc or []:
        builder.add_cc(address)
    for address in args.bcc or []:
        builder.add_bcc(address)
    for address in args.reply_to or []:
        builder.add_reply_to(address)
    for name, value in args.header or []:
        builder.add_header(name, value)

    if args.charset:
        builder.set_charset(args.charset)
    if args.subject:
        builder.set_subject(args.subject)
    if args.body_file:
        builder.set_content(Path(args.body_file).read_text(encoding="utf-8"), args.content_type)
    elif args.body is not None:
        builder.set_content(args.body, args.content_type)
    elif args.content_type:
        builder.set_content_type(args.content_type)

    message = builder.build()
    return message.as_string()


def cmd_session(args) -> str:
    """Session command: resolve the mail session and list its properties."""
    session = create_builder(args).get_mail_session()
    lines = [f"{key}={value}" for key, value in sorted(session.get_properties().items())]
    return "\n".join(lines)


def _add_transport_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="Custom config file path")
    parser.add_argument("--host", help="SMTP host name")
    parser.add_argument("--port", type=int, help="SMTP port")
    parser.add_argument("--ssl", action="store_true", help="Use SSL on connect")
    parser.add_argument("--starttls", action="store_true", help="Enable STARTTLS")
    parser.add_argument("--user", help="SMTP AUTH username")
    parser.add_argument("--password", help="SMTP AUTH password")
    parser.add_argument("--timeout", type=int, help="Connection timeout in milliseconds")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description="mailcompose - Email composition")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    compose_parser = subparsers.add_parser("compose", help="Build a message and print it")
    _add_transport_arguments(compose_parser)
    compose_parser.add_argument("--from", dest="sender", help="Sender address")
    compose_parser.add_argument("--from-name", dest="sender_name", help="Sender display name")
    compose_parser.add_argument("--to", action="append", help="To address (repeatable)")
    compose_parser.add_argument("--cc", action="append", help="Cc address (repeatable)")
    compose_parser.add_argument("--bcc", action="append", help="Bcc address (repeatable)")
    compose_parser.add_argument("--reply-to", action="append", help="Reply-To address (repeatable)")
    compose_parser.add_argument(
        "--header", action="append", type=parse_header, help="Extra header NAME=VALUE (repeatable)"
    )
    compose_parser.add_argument("--subject", help="Subject line")
    compose_parser.add_argument("--body", help="Body text")
    compose_parser.add_argument("--body-file", help="Read body text from file")
    compose_parser.add_argument("--content-type", help="Body content type (default: text/plain)")
    compose_parser.add_argument("--charset", help="Body charset")

    session_parser = subparsers.add_parser("session", help="Print resolved session properties")
    _add_transport_arguments(session_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        if args.command == "compose":
            output = cmd_compose(args)
        else:
            output = cmd_session(args)
    except (EmailError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
