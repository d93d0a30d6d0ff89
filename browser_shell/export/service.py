import html
import logging
from datetime import UTC, datetime

from browser_shell.export.views import OfflineSnapshot
from browser_shell.navigation.views import Destination
from browser_shell.utils import safe_filename

logger = logging.getLogger(__name__)

INTERNAL_SNAPSHOT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
	<meta charset="utf-8">
	<title>{name} - Offline</title>
	<style>
		body {{ font-family: sans-serif; padding: 40px; background: #f1f3f4; }}
		.card {{ background: white; padding: 20px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
	</style>
</head>
<body>
	<div class="card">
		<h1>{name}</h1>
		<p>This is an offline snapshot of <strong>{href}</strong>.</p>
		<p>Generated on {generated_at}</p>
	</div>
</body>
</html>
"""

REMOTE_SNAPSHOT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
	<meta charset="utf-8">
	<title>{name} - Offline</title>
</head>
<body>
	<h1>{name}</h1>
	<p>Offline version of: <a href="{href}">{href}</a></p>
	<p>Note: External content cannot be fully saved due to security restrictions, but you can access the link above when online.</p>
	<hr>
	<p>Snapshot taken on: {generated_at}</p>
</body>
</html>
"""


class OfflineExporter:
	"""
	Builds "save page offline" documents.

	Remote pages live behind isolation layers the shell cannot read into, so their
	snapshot is only a stub linking back to the original address.
	"""

	def snapshot(self, destination: Destination, display_name: str, generated_at: datetime | None = None) -> OfflineSnapshot:
		generated_at = generated_at or datetime.now(UTC)
		template = INTERNAL_SNAPSHOT_TEMPLATE if destination.is_internal else REMOTE_SNAPSHOT_TEMPLATE
		content = template.format(
			name=html.escape(display_name),
			href=html.escape(destination.href, quote=True),
			generated_at=generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip(),
		)
		logger.debug(f'💾 Built offline snapshot of {destination.href} ({len(content)} chars)')
		return OfflineSnapshot(name=safe_filename(display_name), content=content, source_href=destination.href)
