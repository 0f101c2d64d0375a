#!/usr/bin/env python3
"""Concise YAML-driven factory for example model documents."""

import json
import logging
import yaml
import torch
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rtnet.back_end.core import Model
from rtnet.back_end.layer_schema import LayerKind
from rtnet.back_end.serialization import parse_json

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "examples" / "examples_config.yaml"


class NetFactory:
    """Reads a YAML config and writes model documents with random weights."""

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG,
                 output_dir: Optional[Union[str, Path]] = None, seed: int = 0):
        with open(config_path, 'r') as f:
            self.config = yaml.safe_load(f)
        self.output_dir = Path(output_dir) if output_dir else Path(config_path).parent / "nets"
        self.generator = torch.Generator().manual_seed(seed)

    def generate_weights(self, kind: LayerKind, in_size: int, units: int) -> List[Any]:
        """Random weights in the document layout for one layer."""
        def rand(*shape):
            return (torch.randn(*shape, generator=self.generator) * 0.1).tolist()

        if kind.is_dense:
            return [rand(in_size, units), rand(units)]
        if kind == LayerKind.LSTM:
            return [rand(in_size, 4 * units), rand(units, 4 * units), rand(4 * units)]
        return []

    def create_document(self, name: str, spec: Dict[str, Any]) -> Dict[str, Any]:
        """Create a model document from YAML spec."""
        in_shape = spec['in_shape']
        width = in_shape[2] * in_shape[3] if len(in_shape) == 4 else in_shape[-1]

        layers = []
        for i, layer_spec in enumerate(spec.get('layers', [])):
            kind = LayerKind.from_tag(layer_spec['type'])
            if kind is None:
                raise ValueError(f"{name}: layer {i} has unknown type '{layer_spec['type']}'")
            units = layer_spec.get('units', width)

            entry = {
                "type": kind.value,
                "shape": [None, None, units],
                "weights": self.generate_weights(kind, width, units),
            }
            if layer_spec.get('activation'):
                entry["activation"] = layer_spec['activation']
            layers.append(entry)

            if kind != LayerKind.ACTIVATION:
                width = units

        return {"in_shape": in_shape, "layers": layers}

    def create_model(self, name: str, spec: Dict[str, Any]) -> Model:
        return parse_json(self.create_document(name, spec), strict=True)

    def save_document(self, document: Dict[str, Any], name: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"{name}.json"
        with open(output_path, 'w') as f:
            json.dump(document, f, indent=2)
        logger.info(f"Saved: {output_path}")
        return output_path

    def generate_all(self) -> List[Path]:
        """Generate all networks from config; each one is loaded back before it is written."""
        networks = self.config['networks']
        logger.info(f"Generating {len(networks)} networks...")

        paths = []
        for name, spec in networks.items():
            document = self.create_document(name, spec)
            model = parse_json(document, strict=True)
            logger.info(f"{name}: {model!r}")
            paths.append(self.save_document(document, name))

        logger.info(f"All networks generated in {self.output_dir}")
        return paths


if __name__ == "__main__":
    from rtnet.util.debug import setup_logging
    setup_logging("INFO")
    NetFactory().generate_all()
