import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader

from coreason_branch_verifier.events import EventType, VerificationEvent

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class MarkdownReporter:
    def __init__(self, template_dir: Optional[str | Path] = None) -> None:
        self.env = Environment(loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)))
        self.template = self.env.get_template("report.md.j2")

    def generate_report(self, events: List[VerificationEvent], title: str) -> str:
        start_time = None
        scenarios: List[Dict[str, Any]] = []
        current: Optional[Dict[str, Any]] = None
        errors: List[str] = []

        checks_passed = 0
        checks_failed = 0

        for event in events:
            if event.type == EventType.RUN_START:
                if start_time is None:
                    start_time = event.timestamp
                current = {"title": event.message, "checks": []}
                scenarios.append(current)

            elif event.type == EventType.CHECK_RESULT:
                status = event.payload.get("status", "unknown")
                if status == "pass":
                    checks_passed += 1
                elif status == "fail":
                    checks_failed += 1

                # Results emitted outside a run still get reported
                if current is None:
                    current = {"title": "Ungrouped checks", "checks": []}
                    scenarios.append(current)
                current["checks"].append(
                    {
                        "name": event.message,
                        "status": status,
                        "message": event.payload.get("error", ""),
                    }
                )

            elif event.type == EventType.ERROR:
                errors.append(event.message)

        if start_time is None:
            start_time = events[0].timestamp if events else 0

        end_time = events[-1].timestamp if events else start_time
        duration = str(datetime.timedelta(seconds=int(end_time - start_time)))

        final_status = "SUCCESS" if checks_failed == 0 and not errors else "FAILURE"

        context = {
            "title": title,
            "timestamp": datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            "final_status": final_status,
            "duration": duration,
            "checks_count": checks_passed + checks_failed,
            "checks_passed": checks_passed,
            "checks_failed": checks_failed,
            "scenarios": scenarios,
            "errors": errors,
        }

        return self.template.render(context)

    def write_report(self, events: List[VerificationEvent], title: str, path: Path) -> Path:
        path.write_text(self.generate_report(events, title), encoding="utf-8")
        return path
