"""
Image Services

Resize and re-encode uploaded images with Pillow, convert to and from
data URIs, and import images from a remote URL.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from io import BytesIO

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from unipet.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = {'JPEG': 'image/jpeg', 'PNG': 'image/png', 'WEBP': 'image/webp'}
MAX_IMAGE_BYTES = 10 * 1024 * 1024

_DATA_URI = re.compile(r'^data:image/(jpeg|jpg|png|webp);base64,(.+)$', re.DOTALL)


@dataclass
class ProcessedImage:
    data: bytes
    mime_type: str
    width: int
    height: int

    @property
    def size(self):
        return len(self.data)

    @property
    def extension(self):
        subtype = self.mime_type.split('/')[-1]
        return 'jpg' if subtype == 'jpeg' else subtype


def _open_image(data):
    if not data:
        raise ValidationError('Arquivo de imagem vazio')
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationError('Arquivo muito grande')
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError('Apenas imagens JPEG, PNG ou WebP são permitidas') from exc
    if image.format not in ALLOWED_FORMATS:
        raise ValidationError('Apenas imagens JPEG, PNG ou WebP são permitidas')
    return image


def process_image(data, max_width=800, max_height=600, quality=80, fmt='JPEG'):
    """Fit the image inside max_width x max_height and re-encode it.

    Images are never enlarged. JPEG output drops transparency onto white.
    """
    fmt = fmt.upper()
    if fmt not in ALLOWED_FORMATS:
        raise ValueError(f'Unsupported output format: {fmt}')

    image = ImageOps.exif_transpose(_open_image(data))
    image.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)

    if fmt == 'JPEG' and image.mode not in ('RGB', 'L'):
        background = Image.new('RGB', image.size, (255, 255, 255))
        rgba = image.convert('RGBA')
        background.paste(rgba, mask=rgba.split()[-1])
        image = background

    out = BytesIO()
    save_kwargs = {'optimize': True}
    if fmt in ('JPEG', 'WEBP'):
        save_kwargs['quality'] = quality
    image.save(out, format=fmt, **save_kwargs)

    return ProcessedImage(out.getvalue(), ALLOWED_FORMATS[fmt], image.width, image.height)


def to_data_uri(data, mime_type):
    return f'data:{mime_type};base64,{base64.b64encode(data).decode("ascii")}'


def decode_data_uri(data_uri):
    """Return (mime_type, bytes) for a base64 image data URI."""
    match = _DATA_URI.match(data_uri or '')
    if not match:
        raise ValidationError('Data URI de imagem inválido')
    subtype = 'jpeg' if match.group(1) == 'jpg' else match.group(1)
    try:
        raw = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError('Data URI de imagem inválido') from exc
    return f'image/{subtype}', raw


def validate_data_uri(data_uri):
    try:
        decode_data_uri(data_uri)
    except ValidationError:
        return False
    return True


def data_uri_info(data_uri):
    """Describe a data URI: mime type, byte size and extension."""
    try:
        mime_type, raw = decode_data_uri(data_uri)
    except ValidationError:
        return None
    subtype = mime_type.split('/')[-1]
    return {
        'mimeType': mime_type,
        'size': len(raw),
        'extension': 'jpg' if subtype == 'jpeg' else subtype,
        'sizeInKB': round(len(raw) / 1024),
        'sizeInMB': round(len(raw) / (1024 * 1024), 2),
    }


def compress_data_uri(data_uri, quality=70, max_width=800, max_height=600):
    """Recompress a data URI as JPEG and report the size reduction."""
    _, raw = decode_data_uri(data_uri)
    processed = process_image(raw, max_width=max_width, max_height=max_height, quality=quality)
    return {
        'dataUri': to_data_uri(processed.data, processed.mime_type),
        'originalSize': len(raw),
        'compressedSize': processed.size,
        'compressionRatio': round((1 - processed.size / len(raw)) * 100),
    }


def fetch_remote_image(url, timeout=10, max_bytes=MAX_IMAGE_BYTES):
    """Download an image for import. Raises ValidationError on any failure."""
    if not re.match(r'^https?://', url or ''):
        raise ValidationError('URL da imagem deve ser http ou https')

    try:
        resp = requests.get(url, timeout=timeout, stream=True)
    except requests.exceptions.Timeout as exc:
        raise ValidationError('Tempo esgotado ao baixar a imagem') from exc
    except requests.exceptions.RequestException as exc:
        logger.warning('Remote image download failed for %s: %s', url, exc)
        raise ValidationError('Não foi possível baixar a imagem') from exc

    try:
        if resp.status_code != 200:
            raise ValidationError(f'Não foi possível baixar a imagem (HTTP {resp.status_code})')
        content_type = resp.headers.get('Content-Type', '')
        if content_type and not content_type.startswith('image/'):
            raise ValidationError('A URL não aponta para uma imagem')

        chunks = []
        total = 0
        for chunk in resp.iter_content(chunk_size=64 * 1024):
            total += len(chunk)
            if total > max_bytes:
                raise ValidationError('Arquivo muito grande')
            chunks.append(chunk)
        return b''.join(chunks)
    finally:
        resp.close()
