"""
Logger module for the kilo text editor.

Provides a simple file-based logger for debugging and error tracking. The editor
owns the terminal while it runs, so nothing may ever be printed to stdout or
stderr; everything worth keeping goes to the log file instead.
"""
import datetime
import os

# Define the log file path
LOG_FILE_PATH = os.path.expanduser(os.environ.get("KILO_LOG", "~/.kilo/kilo.log"))

def log(message: str) -> None:
    """Append a timestamped message to the log file."""
    try:
        directory = os.path.dirname(LOG_FILE_PATH)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as f:
            timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        # If logging fails (e.g., file not writable), ignore to avoid crashing the editor.
        pass
