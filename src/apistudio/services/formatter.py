"""Formatter service for markdown output."""

import json
from collections.abc import Sequence
from typing import Any

from apistudio.models.environments import Environment
from apistudio.models.output import FormatOptions
from apistudio.models.requests import Collection
from apistudio.models.responses import ApiResponse, ExecutionResult, MaterializedRequest

SENSITIVE_HEADERS = ("authorization", "proxy-authorization", "x-api-key", "cookie", "set-cookie")


class FormatterService:
    """Service for formatting requests, responses and listings as markdown."""

    def format_materialized(
        self,
        request: MaterializedRequest,
        options: FormatOptions,
        secret_headers: Sequence[str] = (),
    ) -> str:
        """Format a materialized request as markdown.

        Args:
            request: The resolved request
            options: Formatting options
            secret_headers: Extra header names to mask, such as an API key header

        Returns:
            Markdown formatted string
        """
        lines: list[str] = [f"## {request.method} {request.url}", ""]

        if options.show_headers:
            lines.append("### Request Headers")
            headers = self._format_headers(request.headers, options.mask_secrets, secret_headers)
            lines.extend(headers or ["(none)"])
            lines.append("")

        if request.body is not None:
            content_type = self._get_content_type(request.headers)
            lines.append("### Request Body")
            lines.append(f"```{self._get_code_block_lang(content_type)}")
            lines.append(self._format_body(request.body, content_type, options))
            lines.append("```")
            lines.append("")

        return "\n".join(lines)

    def format_result(self, result: ExecutionResult, options: FormatOptions) -> str:
        """Format an execution outcome as markdown.

        Args:
            result: The response or error of one execution
            options: Formatting options

        Returns:
            Markdown formatted string
        """
        if result.response is None:
            return f"## Request failed\n\n{result.error}\n"
        return self.format_response(result.response, options)

    def format_response(self, response: ApiResponse, options: FormatOptions) -> str:
        """Format a response as markdown."""
        lines: list[str] = []

        status = f"{response.status} {response.status_text}".strip()
        lines.append(f"## Response {status}")
        lines.append(f"**Time:** {self._format_duration(response.time)}")
        lines.append(f"**Size:** {self._format_size(response.size)}")
        lines.append("")

        if options.show_headers:
            lines.append("### Response Headers")
            lines.extend(self._format_headers(response.headers, options.mask_secrets) or ["(none)"])
            lines.append("")

        body = self._body_text(response.data)
        if body:
            content_type = self._get_content_type(response.headers)
            if not isinstance(response.data, str):
                content_type = content_type or "application/json"
            lines.append("### Response Body")
            lines.append(f"```{self._get_code_block_lang(content_type)}")
            lines.append(self._format_body(body, content_type, options))
            lines.append("```")
            lines.append("")

        return "\n".join(lines)

    def format_collections(self, collections: list[Collection]) -> str:
        """Format collections and their requests as a markdown listing."""
        lines: list[str] = []
        count = len(collections)
        plural = "s" if count != 1 else ""
        lines.append(f"# {count} collection{plural}")
        lines.append("")

        for collection in collections:
            lines.append(self._build_separator(collection.name))
            if collection.description:
                lines.append(collection.description)
            lines.append("")
            if not collection.requests:
                lines.append("(empty)")
            for request in collection.requests:
                lines.append(f"- `{request.id}` **{request.method}** {request.name} - {request.url}")
            lines.append("")

        return "\n".join(lines)

    def format_environments(self, environments: list[Environment], mask_secrets: bool = False) -> str:
        """Format environments and their variables as a markdown listing."""
        lines: list[str] = []
        for environment in environments:
            marker = " (active)" if environment.is_active else ""
            lines.append(f"## {environment.name}{marker}")
            lines.append(f"**ID:** `{environment.id}`")
            lines.append("")
            if not environment.variables:
                lines.append("(no variables)")
            for variable in environment.variables:
                value = "***" if mask_secrets else variable.value
                disabled = " (disabled)" if not variable.enabled else ""
                lines.append(f"- {variable.key} = {value}{disabled}")
            lines.append("")
        return "\n".join(lines)

    def _build_separator(self, label: str, width: int = 80) -> str:
        """Build a visual separator line with a centered label.

        Args:
            label: The label to center in the separator
            width: Total width of the separator line

        Returns:
            Separator string like "******** My Requests ********"
        """
        label_with_spaces = f" {label} "
        remaining = width - len(label_with_spaces)
        if remaining < 2:
            return f"* {label} *"
        left = remaining // 2
        right = remaining - left
        return f"{'*' * left}{label_with_spaces}{'*' * right}"

    def _body_text(self, data: Any) -> str:
        """Turn response data back into text for display."""
        if isinstance(data, str):
            return data
        return json.dumps(data, ensure_ascii=False)

    def _format_body(self, body: str, content_type: str, options: FormatOptions) -> str:
        """Format a body string according to options.

        Args:
            body: The body text
            content_type: The content type
            options: Formatting options

        Returns:
            Formatted body string
        """
        result = body

        if options.pretty_print and "json" in content_type.lower():
            try:
                result = json.dumps(json.loads(body), indent=2, ensure_ascii=False)
            except json.JSONDecodeError:
                pass  # Keep original if not valid JSON

        if options.truncate is not None and len(result) > options.truncate:
            result = result[: options.truncate] + f"\n... (truncated, {len(body)} total chars)"

        return result

    def _format_headers(
        self,
        headers: dict[str, str],
        mask_secrets: bool,
        secret_headers: Sequence[str] = (),
    ) -> list[str]:
        """Format headers for display, masking sensitive values."""
        sensitive = {*SENSITIVE_HEADERS, *(name.lower() for name in secret_headers)}
        lines: list[str] = []
        for name, value in headers.items():
            if mask_secrets and name.lower() in sensitive:
                value = "***"
            lines.append(f"{name}: {value}")
        return lines

    def _format_duration(self, milliseconds: float) -> str:
        """Format an elapsed time in human-readable form."""
        if milliseconds < 1000:
            return f"{milliseconds:.0f}ms"
        return f"{milliseconds / 1000:.2f}s"

    def _format_size(self, size: int) -> str:
        """Format a byte count in human-readable form."""
        if size < 1024:
            return f"{size} B"
        if size < 1024 * 1024:
            return f"{size / 1024:.1f} KB"
        return f"{size / (1024 * 1024):.1f} MB"

    def _get_content_type(self, headers: dict[str, str]) -> str:
        """Extract content type from headers, case-insensitively."""
        for name, value in headers.items():
            if name.lower() == "content-type":
                return value
        return ""

    def _get_code_block_lang(self, content_type: str) -> str:
        """Get the appropriate code block language for a content type."""
        ct = content_type.lower()
        if "json" in ct:
            return "json"
        if "xml" in ct:
            return "xml"
        if "html" in ct:
            return "html"
        if "javascript" in ct:
            return "javascript"
        return ""
