"""Tests for YAML configuration."""

from pathlib import Path

from bizdoc.config import DEFAULT_TERMS, CompanyProfile, GeneratorConfig, load_config
from bizdoc.layout_engine import PageGeometry


class TestGeneratorConfig:
    def test_defaults(self):
        config = load_config()
        assert config.currency == "KES"
        assert config.default_terms == DEFAULT_TERMS
        assert config.geometry == PageGeometry()
        assert config.company.logo_path is None

    def test_yaml_round_trip(self, tmp_path):
        config = GeneratorConfig(
            seed=7,
            num_docs=3,
            out_dir=tmp_path / "docs",
            company=CompanyProfile(name="ACME", logo_path=Path("logo.png")),
            default_terms=["1. Cash only."],
            geometry=PageGeometry(row_height=9.0),
            cooperative=True,
        )
        path = tmp_path / "config.yaml"
        config.to_yaml(path)

        loaded = GeneratorConfig.from_yaml(path)
        assert loaded == config

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("seed: 99\ncompany:\n  name: ACME\n  watermark_path: wm.png\n")
        config = load_config(path)
        assert config.seed == 99
        assert config.company.name == "ACME"
        assert config.company.watermark_path == Path("wm.png")
        assert config.num_docs == 10

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == GeneratorConfig()
