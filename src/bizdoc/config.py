"""Configuration dataclasses and YAML loading for the document generator."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from .layout_engine import PageGeometry


DEFAULT_TERMS = [
    "1. Please NOTE, the above prices are subject to changes incase of VARIATION",
    "   in quantity or specifications and market rates.",
    "2. Material cost is payable either directly to the supplying company or through our Pay Bill No. below",
    "3. DESIGN and LABOUR COST must be paid through our Pay Bill No. below",
]


@dataclass
class CompanyProfile:
    """Company identity printed in document headers."""
    name: str = "CABINET MASTER STYLES & FINISHES"
    location: str = "Ruiru Eastern By-Pass"
    phone: str = "+254729554475"
    email: str = "cabinetmasterstyles@gmail.com"
    logo_path: Optional[Path] = None
    watermark_path: Optional[Path] = None


@dataclass
class GeneratorConfig:
    """Main configuration for document generation."""

    seed: int = 42
    num_docs: int = 10
    out_dir: Path = field(default_factory=lambda: Path("out"))
    currency: str = "KES"
    company: CompanyProfile = field(default_factory=CompanyProfile)
    default_terms: List[str] = field(default_factory=lambda: list(DEFAULT_TERMS))
    geometry: PageGeometry = field(default_factory=PageGeometry)

    # Yield between pages while emitting long documents
    cooperative: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> "GeneratorConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if "out_dir" in data:
            data["out_dir"] = Path(data["out_dir"])

        if "company" in data:
            company = dict(data["company"] or {})
            for key in ("logo_path", "watermark_path"):
                if company.get(key):
                    company[key] = Path(company[key])
            data["company"] = CompanyProfile(**company)

        if "geometry" in data:
            data["geometry"] = PageGeometry(**(data["geometry"] or {}))

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        company = asdict(self.company)
        for key in ("logo_path", "watermark_path"):
            if company[key] is not None:
                company[key] = str(company[key])

        data: Dict = {
            "seed": self.seed,
            "num_docs": self.num_docs,
            "out_dir": str(self.out_dir),
            "currency": self.currency,
            "company": company,
            "default_terms": list(self.default_terms),
            "geometry": asdict(self.geometry),
            "cooperative": self.cooperative,
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load config from path or return default config."""
    if path is None:
        return GeneratorConfig()
    return GeneratorConfig.from_yaml(path)
