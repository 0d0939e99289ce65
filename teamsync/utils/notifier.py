"""User-facing notifications (toasts) for dashboard operations"""
from abc import ABC, abstractmethod
from datetime import datetime


class Colors:
    """ANSI color codes for terminal output"""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'


class Notifier(ABC):
    """Fire-and-forget channel for success and error messages"""

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class ConsoleNotifier(Notifier):
    """Prints toasts to the terminal with visual indicators"""

    def __init__(self, show_time: bool = True):
        self.show_time = show_time

    def _stamp(self) -> str:
        if not self.show_time:
            return ""
        return f"{Colors.DIM}{datetime.now().strftime('%H:%M:%S')}{Colors.ENDC} "

    def success(self, message: str) -> None:
        print(f"  {self._stamp()}{Colors.GREEN}✓ {message}{Colors.ENDC}")

    def error(self, message: str) -> None:
        print(f"  {self._stamp()}{Colors.RED}✗ {message}{Colors.ENDC}")

    def heading(self, title: str, subtitle: str = "") -> None:
        """Print a section header for console sessions"""
        print(f"\n{Colors.HEADER}{'═' * 60}{Colors.ENDC}")
        print(f"{Colors.HEADER}{Colors.BOLD}{title.upper()}{Colors.ENDC}")
        if subtitle:
            print(f"{Colors.DIM}  {subtitle}{Colors.ENDC}")
        print(f"{Colors.HEADER}{'═' * 60}{Colors.ENDC}")

    def table(self, rows) -> None:
        """Print ``(label, value)`` rows"""
        for label, value in rows:
            print(f"   • {label}: {Colors.CYAN}{value}{Colors.ENDC}")
