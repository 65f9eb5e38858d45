"""File-download responses shared by the export endpoints."""

from fastapi.responses import StreamingResponse


def attachment(content: str, media_type: str, filename: str) -> StreamingResponse:
    """Return text content as a file download."""
    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
