# device_manager.py
# Element type / device resolution for loaded weights.

import torch
from typing import Optional, Tuple, Union

_DTYPES = {
    "float32": torch.float32,
    "float": torch.float32,
    "float64": torch.float64,
    "double": torch.float64,
    "float16": torch.float16,
    "bfloat16": torch.bfloat16,
}


def get_default_device() -> torch.device:
    """Get current PyTorch default device."""
    if hasattr(torch, 'get_default_device'):
        return torch.get_default_device()
    # For older PyTorch versions, check where a test tensor is created
    test_tensor = torch.zeros(1)
    device = test_tensor.device
    del test_tensor
    return device


def get_default_dtype() -> torch.dtype:
    """Get current PyTorch default dtype."""
    return torch.get_default_dtype()


def resolve_dtype(dtype: Union[str, torch.dtype, None]) -> torch.dtype:
    """Map a dtype name ('float32', 'float64', ...) or torch.dtype to a floating torch.dtype."""
    if dtype is None:
        return get_default_dtype()
    if isinstance(dtype, torch.dtype):
        if not dtype.is_floating_point:
            raise ValueError(f"Weights need a floating point dtype, got {dtype}")
        return dtype
    key = str(dtype).lower().replace("torch.", "")
    if key not in _DTYPES:
        raise ValueError(f"Unknown dtype '{dtype}'. Choose from {sorted(_DTYPES)}")
    return _DTYPES[key]


def resolve_device(device: Union[str, torch.device, None]) -> torch.device:
    """Map a device name to torch.device, falling back to CPU when CUDA is absent."""
    if device is None:
        return get_default_device()
    device = torch.device(device)
    if device.type == "cuda" and not torch.cuda.is_available():
        return torch.device("cpu")
    return device


def get_current_settings(dtype: Optional[str] = None, device: Optional[str] = None) -> Tuple[torch.device, torch.dtype]:
    """Resolve (device, dtype) for a load call."""
    return resolve_device(device), resolve_dtype(dtype)
