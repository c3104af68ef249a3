"""Command-line interface for logboard."""

import sys
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional

from .board import TaskBoard
from .cli_builder import build_arg_parser
from .config import BoardConfig
from .display import Display, LiveDisplay
from .formatters import OutputFormatter
from .task import TaskState


def _background_job(duration: float, fail: bool) -> str:
    """Simulated unit of work settled through a future."""
    time.sleep(duration)
    if fail:
        raise RuntimeError("background job failed")
    return "ok"


class CLI:
    """Command-line interface for logboard."""

    def __init__(self):
        self.parser = build_arg_parser()

    def run(self, argv: Optional[list[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code
        """
        args = self.parser.parse_args(argv)
        output = OutputFormatter(no_color=args.no_color)
        sym = output.symbols

        try:
            if args.tasks < 0 or args.steps < 1:
                raise ValueError("--tasks must be non-negative and --steps at least 1")
            config = BoardConfig(interval=args.interval, no_color=args.no_color)
            board = TaskBoard(display=self._build_display(output), config=config)
            failure = self._run_demo(board, args.tasks, args.steps, args.step_delay, args.fail)
        except ValueError as err:
            output.print(f"{sym.Cross} [bold red]Error:[/bold red] {err}")
            return 1

        rejected = [task.name for task in board.tasks if task.state is TaskState.REJECTED]
        if failure is not None and "background" not in rejected:
            rejected.append("background")
        if rejected:
            output.print(f"{sym.Cross} [bold red]failed:[/bold red] {', '.join(rejected)}")
            return 1

        output.print(f"{sym.Check} [dim]done:[/dim] [bold]{len(board.tasks)}[/bold] task(s) completed")
        return 0

    def _build_display(self, output: OutputFormatter) -> Display:
        return LiveDisplay(console=output.console)

    def _run_demo(
        self, board: TaskBoard, tasks: int, steps: int, step_delay: float, fail: bool
    ) -> Optional[BaseException]:
        """Drive simulated progress tasks and one future-backed task.

        Returns the background job exception, if it failed.
        """
        with ThreadPoolExecutor(max_workers=1) as pool:
            board.start()
            try:
                progress_tasks = [board.log_progress(f"task-{i + 1}", steps) for i in range(tasks)]
                background: Future = board.log_future(
                    "background",
                    pool.submit(_background_job, step_delay * steps / 2, fail),
                )

                for step in range(1, steps + 1):
                    time.sleep(step_delay)
                    for task in progress_tasks:
                        task.update(step, status=f"step {step}/{steps}")
                    board.log(f"completed step {step}")

                wait([background])
                failure = background.exception()
                if failure is not None:
                    board.error(f"background: {failure}")
            finally:
                board.stop()
        return failure


def main() -> int:
    """Main entry point."""
    cli = CLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
