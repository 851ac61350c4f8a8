"""Write generated layouts and document metadata to JSON files."""

import json
from pathlib import Path
from typing import Any, Dict, List

from .document_emitter import RenderedDocument
from .schema import text_field_names


def layout_to_dict(document: RenderedDocument, doc_id: str) -> Dict[str, Any]:
    """Serialize a rendered document's template and inputs."""
    data = document.to_dict()
    data["doc_id"] = doc_id
    data["page_count"] = document.page_count
    return data


def missing_inputs(document: RenderedDocument) -> List[str]:
    """Text fields with no matching inputs entry, as 'page:name' strings."""
    missing = []
    for page_idx, (schema, inputs) in enumerate(zip(document.schemas, document.inputs)):
        missing.extend(f"{page_idx}:{name}" for name in text_field_names(schema) if name not in inputs)
    return missing


def write_layout(document: RenderedDocument, out_dir: Path, doc_id: str) -> Path:
    """Write layouts/<doc_id>.json and return its path."""
    layouts_dir = Path(out_dir) / "layouts"
    layouts_dir.mkdir(parents=True, exist_ok=True)

    path = layouts_dir / f"{doc_id}.json"
    with open(path, "w") as f:
        json.dump(layout_to_dict(document, doc_id), f, indent=2)
    return path


def write_layout_file(document: RenderedDocument, path: Path) -> Path:
    """Write a rendered document's layout to an explicit JSON path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(layout_to_dict(document, path.stem), f, indent=2)
    return path


def write_document_metadata(
    doc_id: str,
    kind: str,
    document_number: str,
    page_count: int,
    pdf_path: Path,
    out_dir: Path,
) -> None:
    """Append document-level metadata to documents.jsonl."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    metadata = {
        "doc_id": doc_id,
        "kind": kind,
        "document_number": document_number,
        "page_count": page_count,
        "pdf_path": str(pdf_path),
    }

    with open(out_dir / "documents.jsonl", "a") as f:
        f.write(json.dumps(metadata) + "\n")


def clear_metadata(out_dir: Path) -> None:
    """Remove documents.jsonl before a fresh run."""
    path = Path(out_dir) / "documents.jsonl"
    if path.exists():
        path.unlink()
