"""
Main entry point and editor context for the kilo text editor.
"""
import sys
import time

from kilo import buffer, commands, config, logger, terminal, ui

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"

class EditorContext:
    """
    Holds the state of the editor: the open buffer, the screen size, the status
    message and the quit confirmation counter. Every operation receives it.
    """
    def __init__(self, term, settings=None):
        self.terminal = term
        self.config = settings if settings is not None else config.Config()

        # The open document, empty until a file is loaded
        self.buffer = buffer.Buffer(tab_stop=self.config.tab_stop)

        # Two lines at the bottom are reserved for the status and message bars
        rows, cols = term.get_window_size()
        self.screen_rows = rows - 2
        self.screen_cols = cols

        # Message bar text and the time it was set
        self.status_message = ""
        self.status_message_time = 0

        # Remaining quit presses needed while there are unsaved changes
        self.quit_times = self.config.quit_times

        # Running flag
        self.exit_flag = False

    def set_status_message(self, template: str, *args):
        """Set the message bar text to `template` formatted with `args`."""
        self.status_message = template.format(*args)
        self.status_message_time = time.time()

    def read_key(self) -> int:
        return ui.keys.read_key(self.terminal.read)

    def graceful_exit(self):
        """Clear the screen and leave the main loop."""
        self.terminal.write(terminal.CLEAR_SCREEN + terminal.CURSOR_HOME)
        self.exit_flag = True

def main(term, argv):
    context = EditorContext(term, config.load_config())
    logger.log("Editor started.")

    # If started with a filename argument, open it
    if argv:
        commands.open_file(context, argv[0])

    context.set_status_message(HELP_MESSAGE)

    # Main loop
    while not context.exit_flag:
        ui.screen.display(context)
        key = context.read_key()
        ui.input.process_keypress(context, key)

    logger.log("Editor exited.")

def run(argv=None):
    """
    Start the editor with the terminal in raw mode. Fatal errors are reported
    after the terminal has been restored.
    """
    argv = sys.argv[1:] if argv is None else argv
    try:
        terminal.wrapper(main, argv)
    except terminal.TerminalError as e:
        terminal.die(str(e))
    except OSError as e:
        if e.filename is not None:
            terminal.die(f"{e.filename}: {e.strerror}")
        terminal.die(str(e))

if __name__ == "__main__":
    run()
