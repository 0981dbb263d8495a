from .base_verifier import BaseVerifier
from .check_result import CheckReport


class InventoryVerifier(BaseVerifier):
    """Dumps every resource matching the prefix for operator reference."""

    name = "inventory"

    def run(self) -> CheckReport:
        prefix = self.config.prefix
        self._section = f"Inventory (prefix '{prefix}')"
        self.reporter.section(self._section)

        resources = self.scanner.scan_all_supported_resources(prefix)
        self.reporter.table(
            ["Type", "Name", "ID", "Related"],
            [(r.type, r.name, r.id, ", ".join(r.related_resources)) for r in resources],
        )
        return self.report
