"""
Command line front end for the case book and its exports.
"""
import argparse
import json
import sys
from typing import List, Optional, Tuple

from caseflow.config import AppConfig
from caseflow.core.application.use_cases import DIAGRAM_FORMATS, ExportDeliverablesUseCase, ExportKind
from caseflow.core.domain import CaseflowError, CaseDraft, ExpectedStatus, Step, TestCase
from caseflow.core.services import CaseBook, FlowGraphBuilder, configure_logging
from caseflow.infrastructure.export import TabularGenerator
from caseflow.infrastructure.mermaid import MermaidInkClient
from caseflow.infrastructure.storage import JSONFileStore


def parse_step(value: str) -> Step:
    """Parse ``action|status|expected``; status and expected are optional."""
    parts = [part.strip() for part in value.split('|')]
    if len(parts) > 3:
        raise argparse.ArgumentTypeError(f"Too many fields in step '{value}' (expected action|status|expected)")
    action = parts[0]
    try:
        status = ExpectedStatus.parse(parts[1]) if len(parts) > 1 and parts[1] else ExpectedStatus.SUCCESS
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    expected = parts[2] if len(parts) > 2 else ""
    return Step(action=action, expected_status=status, expected_value=expected)


def parse_dependency(value: str) -> Tuple[int, int]:
    """Parse ``STEP:PREREQ`` (1-based) into 0-based indices."""
    try:
        step, prereq = (int(part) for part in value.split(':'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid dependency '{value}' (expected STEP:PREREQ)")
    if step < 1 or prereq < 1:
        raise argparse.ArgumentTypeError(f"Step numbers start at 1 in '{value}'")
    return step - 1, prereq - 1


def parse_branch(value: str) -> Tuple[int, int, str]:
    """Parse ``STEP:TARGET:condition`` (1-based) into 0-based indices."""
    parts = value.split(':', 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Invalid branch '{value}' (expected STEP:TARGET:condition)")
    try:
        step, target = int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid branch '{value}' (step numbers must be integers)")
    if step < 1 or target < 1:
        raise argparse.ArgumentTypeError(f"Step numbers start at 1 in '{value}'")
    return step - 1, target - 1, parts[2]


def build_draft(args: argparse.Namespace) -> CaseDraft:
    """Assemble a new case draft from ``add`` arguments."""
    draft = CaseDraft(title=args.title or "", precondition=args.precondition or "", steps=[])

    if args.from_json:
        with open(args.from_json, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{args.from_json} does not contain a JSON object")
        imported = TestCase.from_dict({**data, 'id': 'import'})
        draft.title = args.title or imported.title
        draft.precondition = args.precondition or imported.precondition
        draft.steps = imported.steps

    for step in args.steps:
        draft.add_step(step)
    if not draft.steps:
        draft.add_step()

    for step_idx, prereq_idx in args.dependencies:
        draft.set_dependency(step_idx, prereq_idx)
    for step_idx, target_idx, condition in args.branches:
        draft.add_branch(step_idx, condition=condition, next_step=target_idx)
    return draft


def cmd_add(book: CaseBook, args: argparse.Namespace) -> int:
    try:
        draft = build_draft(args)
    except IndexError:
        print("Error: dependency or branch refers to a step that was not given", file=sys.stderr)
        return 2
    case = book.commit(draft)
    print(f"Created {case.id}: {case.title}")
    return 0


def cmd_list(book: CaseBook, args: argparse.Namespace) -> int:
    if not len(book):
        print("No test cases.")
        return 0
    for case in book:
        print(f"{case.id}: {case.title} ({len(case.steps)} steps)")
    return 0


def cmd_show(book: CaseBook, args: argparse.Namespace) -> int:
    case = book.get_case(args.case_id)
    print(f"{case.id}: {case.title}")
    print(f"Precondition: {case.precondition or 'None'}")
    print(TabularGenerator().format_steps(case))
    if args.graph:
        print()
        print(FlowGraphBuilder().to_mermaid(case), end='')
    return 0


def cmd_delete(book: CaseBook, args: argparse.Namespace) -> int:
    if book.delete_case(args.case_id):
        print(f"Deleted {args.case_id}")
    else:
        print(f"No test case {args.case_id}; nothing deleted")
    return 0


def cmd_clear(book: CaseBook, args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to clear all test cases without --yes", file=sys.stderr)
        return 2
    book.clear()
    print("All test cases removed")
    return 0


def cmd_export(book: CaseBook, args: argparse.Namespace, config: AppConfig) -> int:
    use_case = ExportDeliverablesUseCase(output_dir=args.output_dir or config.output.output_dir)
    kinds = [ExportKind(kind) for kind in args.kinds] if args.kinds else None
    for kind, path in use_case.execute(book.cases, kinds).items():
        print(f"{kind.value}: {path}")
    return 0


def cmd_diagram(book: CaseBook, args: argparse.Namespace, config: AppConfig) -> int:
    renderer = MermaidInkClient(config.render.base_url, timeout=config.render.timeout)
    use_case = ExportDeliverablesUseCase(
        output_dir=args.output_dir or config.output.output_dir,
        diagram_renderer=renderer,
    )
    path = use_case.export_diagram(book.get_case(args.case_id), args.format)
    print(f"{args.format}: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caseflow",
        description="Author structured test cases and export them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  caseflow add --title Login --precondition "user exists" \\
      --step "enter creds|成功" --step "submit|success|redirect" \\
      --depends-on 2:1 --branch "2:1:invalid"
  caseflow list
  caseflow show TC-1 --graph
  caseflow export --kind xlsx --kind html
  caseflow diagram TC-1 --format svg
        """
    )
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--store', help='Store file path (overrides configuration)')
    parser.add_argument('--log-level', help='Logging level, e.g. INFO or DEBUG')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    add_parser = subparsers.add_parser('add', help='Create a test case')
    add_parser.add_argument('--title', default=None, help='Case title')
    add_parser.add_argument('--precondition', default=None, help='Precondition text')
    add_parser.add_argument('--step', dest='steps', action='append', type=parse_step, default=[],
                            help='Step as "action|status|expected" (repeatable)')
    add_parser.add_argument('--depends-on', dest='dependencies', action='append', type=parse_dependency,
                            default=[], help='STEP:PREREQ, 1-based (repeatable)')
    add_parser.add_argument('--branch', dest='branches', action='append', type=parse_branch, default=[],
                            help='STEP:TARGET:condition, 1-based (repeatable)')
    add_parser.add_argument('--from-json', help='Import title, precondition and steps from a JSON case file')

    subparsers.add_parser('list', help='List test cases')

    show_parser = subparsers.add_parser('show', help='Show one test case')
    show_parser.add_argument('case_id', help='Case id, e.g. TC-1')
    show_parser.add_argument('--graph', action='store_true', help='Also print the Mermaid flowchart')

    delete_parser = subparsers.add_parser('delete', help='Delete a test case')
    delete_parser.add_argument('case_id', help='Case id, e.g. TC-1')

    clear_parser = subparsers.add_parser('clear', help='Delete all test cases')
    clear_parser.add_argument('--yes', action='store_true', help='Confirm removal')

    export_parser = subparsers.add_parser('export', help='Export the collection')
    export_parser.add_argument('--kind', dest='kinds', action='append',
                               choices=[kind.value for kind in ExportKind],
                               help='Export kind (repeatable, default: all)')
    export_parser.add_argument('--output-dir', default=None, help='Output directory')

    diagram_parser = subparsers.add_parser('diagram', help='Export the flow diagram of a case')
    diagram_parser.add_argument('case_id', help='Case id, e.g. TC-1')
    diagram_parser.add_argument('--format', default='mmd', choices=DIAGRAM_FORMATS, help='Diagram format')
    diagram_parser.add_argument('--output-dir', default=None, help='Output directory')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    handlers = {
        'add': cmd_add,
        'list': cmd_list,
        'show': cmd_show,
        'delete': cmd_delete,
        'clear': cmd_clear,
    }
    try:
        config = AppConfig.load(args.config)
        configure_logging(
            level=args.log_level or config.logging.level,
            json_output=config.logging.json,
            log_file=config.logging.log_file,
        )
        book = CaseBook(JSONFileStore(args.store or config.storage.path), key=config.storage.key)

        if args.command == 'export':
            return cmd_export(book, args, config)
        if args.command == 'diagram':
            return cmd_diagram(book, args, config)
        return handlers[args.command](book, args)
    except (CaseflowError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
