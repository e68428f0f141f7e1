"""Product image URL helpers.

Images live in a public storage bucket; the storefront requests resized
renditions by appending transform parameters to the public URL.
"""

import random
import string
import time
from urllib.parse import urlencode

IMAGE_BUCKET = "product-images"

_VARIANT_SIZES = {
    "thumbnail": 150,
    "medium": 400,
    "large": 800,
}


def optimized_image_url(url: str, width: int | None = None, height: int | None = None) -> str:
    if not url:
        return url

    params = []
    if width:
        params.append(("width", width))
    if height:
        params.append(("height", height))
    params.append(("resize", "contain"))
    params.append(("quality", 80))
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(params)}"


def image_variants(url: str) -> dict[str, str]:
    variants = {name: optimized_image_url(url, size, size) for name, size in _VARIANT_SIZES.items()}
    variants["original"] = url
    return variants


def storage_path(filename: str, folder: str = "products") -> str:
    """Unique object path for an uploaded file, keeping its extension."""
    extension = filename.rsplit(".", 1)[-1] if "." in filename else ""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=11))
    path = f"{folder}/{int(time.time() * 1000)}-{suffix}"
    return f"{path}.{extension}" if extension else path
