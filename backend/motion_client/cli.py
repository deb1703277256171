"""
Console front-end for the projects API.

Commands:
- upload FILE    create a project from a reference video
- process ID     start motion extraction / transfer
- status ID      show the current project state
- run FILE       upload, process and poll until the project finishes

Exit Codes:
- 0: Success
- 1: API error (bad upload, unknown project, server error)
- 2: Project ended in the failed state
"""

import argparse
import os
import sys
from typing import Optional, Sequence

from .api import ProjectAPIClient, ProjectAPIError
from .mutations import CreateProjectMutation, Notification, ProcessProjectMutation
from .query import POLL_INTERVAL_SECONDS, ProjectQuery
from .schemas import Project

DEFAULT_API_URL = "http://localhost:8000"


def _print_notification(notification: Notification) -> None:
    print(f"[{notification.title}] {notification.description}", file=sys.stderr)


def _print_project(project: Project) -> None:
    print(f"Project #{project.id}: {project.status}")
    print(f"  original:  {project.original_video_url}")
    if project.status == "completed":
        print(f"  identity:  {project.identity_frame_url}")
        print(f"  generated: {project.generated_video_url}")


def _print_progress(project: Project) -> None:
    print(f"  ... {project.status}", file=sys.stderr)


def cmd_upload(client: ProjectAPIClient, args) -> int:
    project = CreateProjectMutation(client, notify=_print_notification).mutate(args.file)
    _print_project(project)
    return 0


def cmd_process(client: ProjectAPIClient, args) -> int:
    project = ProcessProjectMutation(client, notify=_print_notification).mutate(args.id)
    _print_project(project)
    return 0


def cmd_status(client: ProjectAPIClient, args) -> int:
    _print_project(client.get_project(args.id))
    return 0


def cmd_run(client: ProjectAPIClient, args) -> int:
    project = CreateProjectMutation(client, notify=_print_notification).mutate(args.file)
    query = ProjectQuery(client, project.id, interval=args.interval)
    ProcessProjectMutation(client, query, notify=_print_notification).mutate(project.id)

    final = query.poll(on_update=_print_progress)
    if query.error is not None and final is None:
        raise query.error
    _print_project(final)
    return 2 if final.status == "failed" else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="motion-client", description="Motion transfer projects client")
    parser.add_argument(
        "--api-url",
        default=os.getenv("MOTION_API_URL", DEFAULT_API_URL),
        help="Base URL of the projects service (env: MOTION_API_URL)",
    )
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("upload", help="Upload a reference video")
    p.add_argument("file")
    p.set_defaults(func=cmd_upload)

    p = sub.add_parser("process", help="Start processing a project")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_process)

    p = sub.add_parser("status", help="Show a project")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("run", help="Upload, process and wait for the result")
    p.add_argument("file")
    p.add_argument("--interval", type=float, default=POLL_INTERVAL_SECONDS, help="Polling interval in seconds")
    p.set_defaults(func=cmd_run)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    with ProjectAPIClient(args.api_url, timeout_seconds=args.timeout) as client:
        try:
            return args.func(client, args)
        except ProjectAPIError as e:
            print(f"ERROR: {e.message}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
