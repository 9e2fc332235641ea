"""Headless terminal for chatting through the session engine.

Purpose
-------
A line-oriented shell over :class:`~navi.service.runtime.ChatRuntime`. The
shell thread is also the owner thread: after posting a prompt it steps the
runtime until the reply finishes, printing deltas as the reducer applies
them.

Commands
--------
- ``/new``: Start a new conversation (cancels a reply in flight)
- ``/effort``: Cycle the reasoning effort
- ``/model [name|number]``: List the configured models or switch to one
  (applies from the next request)
- ``/status``: Print provider, model, effort and the last status line
- ``/help``: Show commands
- ``/quit`` (or ``quit``/``exit``, or EOF): Leave the shell

Ctrl-C while a reply streams cancels it; the partial text stays in the log.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, TextIO

from ...base.streaming.deltas import AnswerChunk, ReasoningChunk
from ...config.settings import ModelEntry
from ...core.actions import CancelRequested, CycleEffort, NewConversation, Quit, SelectModel, SubmitRequest
from ...core.state import AppState
from ..runtime import ChatRuntime
from .cli_utils import suppress_console_logs as _suppress_console_logs

QUIT_WORDS = {"/quit", "/exit", "quit", "exit"}

_COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
}
_RESET = "\033[0m"


def _readline(prompt: str) -> str:
    """Read a single line from stdin; return ``/quit`` on EOF."""
    try:
        return input(prompt)
    except EOFError:
        return "/quit"


class StreamPrinter:
    """Runtime listener printing reasoning and answer text as it arrives."""

    def __init__(self, out: TextIO, colors: bool) -> None:
        self._out = out
        self._colors = colors
        self._channel: Optional[str] = None

    def color(self, text: str, color: str) -> str:
        if not self._colors:
            return text
        return f"{_COLORS.get(color, '')}{text}{_RESET}"

    def __call__(self, state: AppState, event: object) -> None:
        if isinstance(event, ReasoningChunk):
            self._write("reasoning", self.color(event.text, "magenta"))
        elif isinstance(event, AnswerChunk):
            self._write("answer", event.text)

    def _write(self, channel: str, text: str) -> None:
        if self._channel is not None and self._channel != channel:
            self._out.write("\n")
        self._channel = channel
        self._out.write(text)
        self._out.flush()

    def end_reply(self) -> None:
        """Terminate the current line if anything was printed."""
        if self._channel is not None:
            self._out.write("\n")
            self._out.flush()
        self._channel = None


class ChatShell:
    """Interactive loop bound to one runtime.

    Parameters
    ----------
    runtime: ChatRuntime
        Runtime owned by this shell (the shell thread is its owner thread).
    out: TextIO
        Destination for streamed text and status lines.
    colors: bool
        Wrap reasoning and status lines in ANSI colors.
    models: Sequence[ModelEntry]
        Model catalog offered by ``/model``; only entries for the active
        provider are listed or selectable.
    """

    def __init__(
        self,
        runtime: ChatRuntime,
        *,
        out: Optional[TextIO] = None,
        colors: bool = False,
        models: Sequence[ModelEntry] = (),
    ) -> None:
        self.runtime = runtime
        self.models = list(models)
        self._out = out or sys.stdout
        self.printer = StreamPrinter(self._out, colors)
        runtime.subscribe(self.printer)

    def _print(self, text: str = "") -> None:
        print(text, file=self._out, flush=True)

    def _prompt(self) -> str:
        return f"[{self.runtime.state.effort.label}] > "

    def ask(self, text: str) -> bool:
        """Send ``text`` and stream the reply. Returns False when the reply failed."""
        self.runtime.post(SubmitRequest(text))
        with _suppress_console_logs():
            self._wait_for_reply()
        self.printer.end_reply()
        state = self.runtime.state
        if state.error:
            self._print(self.printer.color(f"error: {state.error}", "red"))
            return False
        self._print(self.printer.color(state.status_message, "yellow"))
        return True

    def _wait_for_reply(self) -> None:
        while self.runtime.running:
            try:
                if self.runtime.run_until_idle():
                    return
            except KeyboardInterrupt:
                self.runtime.post(CancelRequested())

    def status(self) -> None:
        state = self.runtime.state
        self._print(self.printer.color("== status ==", "cyan"))
        self._print(f"provider : {getattr(self.runtime.adapter, 'provider_name', 'unknown')}")
        self._print(f"model    : {state.model_name or 'default'}")
        self._print(f"effort   : {state.effort.label}")
        self._print(f"messages : {len(state.segments)}")
        self._print(f"status   : {state.status_message}")

    def help(self) -> None:
        self._print("Type a message and press Enter. Ctrl-C cancels a reply in flight.")
        self._print("  /new     start a new conversation")
        self._print("  /effort  cycle reasoning effort")
        self._print("  /model   list models; /model <name|number> switches")
        self._print("  /status  show current settings")
        self._print("  /quit    leave")

    def _provider(self) -> str:
        return getattr(self.runtime.adapter, "provider_name", "unknown")

    def _available_models(self) -> List[ModelEntry]:
        provider = self._provider()
        return [entry for entry in self.models if entry.provider == provider]

    def list_models(self) -> None:
        available = self._available_models()
        if not available:
            self._print(f"No models configured for {self._provider()}; add a 'models' list to the config file.")
            return
        active = self.runtime.state.model_name
        for index, entry in enumerate(available, start=1):
            marker = "*" if entry.name == active else " "
            line = f"{marker} {index}. {entry.name} [{entry.provider}]"
            if entry.description:
                line += f"  {entry.description}"
            self._print(line)

    def select_model(self, choice: str) -> None:
        """Switch to a catalog entry chosen by 1-based number or name.

        A name missing from the catalog is accepted as-is so models the
        provider serves but nobody listed stay reachable; a name listed for
        another provider is rejected.
        """
        available = self._available_models()
        name = choice
        if choice.isdigit():
            index = int(choice)
            if not 1 <= index <= len(available):
                self._print(f"no model number {index} (try /model)")
                return
            name = available[index - 1].name
        elif not any(entry.name == choice for entry in available):
            other = next((entry for entry in self.models if entry.name == choice), None)
            if other is not None:
                self._print(f"model '{choice}' is configured for {other.provider}, not {self._provider()}")
                return
        self._apply(SelectModel(name))

    def _apply(self, action: object) -> None:
        self.runtime.post(action)
        self.runtime.step()
        self._print(self.printer.color(self.runtime.state.status_message, "yellow"))

    def handle_line(self, line: str) -> bool:
        """Execute one input line. Returns False when the shell should exit."""
        text = line.strip()
        if not text:
            return True
        command = text.lower()
        if command in QUIT_WORDS:
            self.runtime.post(Quit())
            self.runtime.step()
            return False
        if command == "/new":
            self._apply(NewConversation())
        elif command == "/effort":
            self._apply(CycleEffort())
        elif command == "/model" or command.startswith("/model "):
            choice = text[len("/model"):].strip()
            if choice:
                self.select_model(choice)
            else:
                self.list_models()
        elif command == "/status":
            self.status()
        elif command == "/help":
            self.help()
        elif command.startswith("/"):
            self._print(f"unknown command '{text}' (try /help)")
        else:
            self.ask(text)
        return True

    def loop(self) -> int:
        self._print(self.printer.color(self.runtime.state.status_message, "green"))
        try:
            while self.runtime.running:
                try:
                    line = _readline(self._prompt())
                except KeyboardInterrupt:
                    self._print()
                    continue
                if not self.handle_line(line):
                    break
        finally:
            self.runtime.shutdown()
        return 0


def handle_shell(
    runtime: ChatRuntime,
    *,
    colors: bool = False,
    out: Optional[TextIO] = None,
    models: Sequence[ModelEntry] = (),
) -> int:
    """Run the interactive shell until quit/EOF."""
    return ChatShell(runtime, out=out, colors=colors, models=models).loop()


def handle_prompt(runtime: ChatRuntime, prompt: str, *, colors: bool = False, out: Optional[TextIO] = None) -> int:
    """Send a single prompt, print the reply and exit (1 when the reply failed)."""
    shell = ChatShell(runtime, out=out, colors=colors)
    try:
        return 0 if shell.ask(prompt) else 1
    finally:
        runtime.shutdown()


__all__ = ["ChatShell", "StreamPrinter", "handle_shell", "handle_prompt"]
