import base64
from io import BytesIO

import pytest
import requests
from PIL import Image

from unipet.errors import ValidationError
from unipet.services import images
from unipet.services.images import (
    compress_data_uri,
    data_uri_info,
    decode_data_uri,
    fetch_remote_image,
    process_image,
    to_data_uri,
    validate_data_uri,
)


def make_image(size=(1600, 1200), fmt='PNG', mode='RGB', color=(200, 30, 30)):
    if mode == 'RGBA':
        color = color + (128,)
    buf = BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


class FakeResponse:
    def __init__(self, status_code=200, content=b'', content_type='image/png'):
        self.status_code = status_code
        self.headers = {'Content-Type': content_type}
        self._content = content
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._content), chunk_size):
            yield self._content[i:i + chunk_size]

    def close(self):
        self.closed = True


# ── Service helpers ──────────────────────────────────────────

def test_process_image_fits_inside_box():
    processed = process_image(make_image((1600, 1200)))
    assert (processed.width, processed.height) == (800, 600)
    assert processed.mime_type == 'image/jpeg'
    assert processed.extension == 'jpg'
    assert Image.open(BytesIO(processed.data)).format == 'JPEG'


def test_process_image_keeps_aspect_ratio():
    processed = process_image(make_image((2000, 500)))
    assert (processed.width, processed.height) == (800, 200)


def test_process_image_never_enlarges():
    processed = process_image(make_image((120, 80)))
    assert (processed.width, processed.height) == (120, 80)


def test_process_image_flattens_transparency_for_jpeg():
    processed = process_image(make_image((50, 50), mode='RGBA'))
    assert Image.open(BytesIO(processed.data)).mode == 'RGB'


def test_process_image_can_keep_png():
    processed = process_image(make_image((50, 50), mode='RGBA'), fmt='png')
    assert processed.mime_type == 'image/png'
    assert Image.open(BytesIO(processed.data)).mode == 'RGBA'


@pytest.mark.parametrize('data', [b'', b'not an image', make_image((10, 10), fmt='GIF')])
def test_process_image_rejects_unsupported_input(data):
    with pytest.raises(ValidationError):
        process_image(data)


def test_data_uri_helpers():
    raw = make_image((10, 10))
    uri = to_data_uri(raw, 'image/png')
    assert uri.startswith('data:image/png;base64,')
    assert validate_data_uri(uri)
    assert decode_data_uri(uri) == ('image/png', raw)

    info = data_uri_info(uri)
    assert info['mimeType'] == 'image/png'
    assert info['size'] == len(raw)
    assert info['extension'] == 'png'


@pytest.mark.parametrize('uri', ['', 'data:text/plain;base64,aGk=', 'data:image/png;base64,@@@'])
def test_invalid_data_uris(uri):
    assert not validate_data_uri(uri)
    assert data_uri_info(uri) is None


def test_jpg_data_uri_is_normalised():
    uri = 'data:image/jpg;base64,' + base64.b64encode(b'abc').decode()
    assert decode_data_uri(uri)[0] == 'image/jpeg'


def test_compress_data_uri_reports_sizes():
    raw = make_image((1600, 1200), fmt='PNG')
    result = compress_data_uri(to_data_uri(raw, 'image/png'))
    assert result['dataUri'].startswith('data:image/jpeg;base64,')
    assert result['originalSize'] == len(raw)
    assert result['compressedSize'] > 0
    assert result['compressionRatio'] == round((1 - result['compressedSize'] / len(raw)) * 100)


def test_fetch_remote_image(monkeypatch):
    raw = make_image((10, 10))
    fake = FakeResponse(content=raw)
    calls = []

    def fake_get(url, timeout, stream):
        calls.append((url, timeout, stream))
        return fake

    monkeypatch.setattr(images.requests, 'get', fake_get)
    assert fetch_remote_image('https://example.com/pet.png', timeout=3) == raw
    assert calls == [('https://example.com/pet.png', 3, True)]
    assert fake.closed


@pytest.mark.parametrize('response', [
    FakeResponse(status_code=404),
    FakeResponse(content=b'<html></html>', content_type='text/html'),
    FakeResponse(content=b'x' * 2048),
])
def test_fetch_remote_image_rejects_bad_responses(monkeypatch, response):
    monkeypatch.setattr(images.requests, 'get', lambda url, timeout, stream: response)
    with pytest.raises(ValidationError):
        fetch_remote_image('https://example.com/pet.png', max_bytes=1024)
    assert response.closed


def test_fetch_remote_image_wraps_network_errors(monkeypatch):
    def boom(url, timeout, stream):
        raise requests.exceptions.ConnectionError('refused')

    monkeypatch.setattr(images.requests, 'get', boom)
    with pytest.raises(ValidationError):
        fetch_remote_image('https://example.com/pet.png')


def test_fetch_remote_image_requires_http_url():
    with pytest.raises(ValidationError):
        fetch_remote_image('file:///etc/passwd')


# ── Routes ───────────────────────────────────────────────────

def test_upload_file_and_serve(admin_client):
    resp = admin_client.post('/api/admin/images',
                             data={'file': (BytesIO(make_image()), 'Foto do Rex.png')},
                             content_type='multipart/form-data')
    assert resp.status_code == 201
    asset = resp.get_json()
    assert asset['width'] == 800
    assert asset['height'] == 600
    assert asset['mimeType'] == 'image/jpeg'
    assert asset['filename'] == 'Foto_do_Rex.jpg'
    assert asset['url'] == f'/api/images/{asset["id"]}'

    served = admin_client.get(asset['url'])
    assert served.status_code == 200
    assert served.mimetype == 'image/jpeg'
    assert 'max-age=31536000' in served.headers['Cache-Control']
    assert len(served.data) == asset['size']

    etag = served.headers['ETag']
    assert admin_client.get(asset['url'], headers={'If-None-Match': etag}).status_code == 304


def test_upload_data_uri(admin_client):
    uri = to_data_uri(make_image((300, 300)), 'image/png')
    resp = admin_client.post('/api/admin/images', json={'dataUri': uri, 'filename': 'logo.png'})
    assert resp.status_code == 201
    assert resp.get_json()['filename'] == 'logo.jpg'
    assert resp.get_json()['width'] == 300


def test_upload_from_url(admin_client, monkeypatch):
    raw = make_image((1000, 1000))
    monkeypatch.setattr(images.requests, 'get', lambda url, timeout, stream: FakeResponse(content=raw))
    resp = admin_client.post('/api/admin/images', json={'url': 'https://cdn.example.com/a/dog.png'})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['filename'] == 'dog.jpg'
    assert (body['width'], body['height']) == (600, 600)


def test_upload_rejects_missing_or_invalid_image(admin_client):
    assert admin_client.post('/api/admin/images', json={}).status_code == 400
    resp = admin_client.post('/api/admin/images',
                             data={'file': (BytesIO(b'plain text'), 'notes.txt')},
                             content_type='multipart/form-data')
    assert resp.status_code == 400


def test_list_and_delete_images(admin_client, client):
    uri = to_data_uri(make_image((20, 20)), 'image/png')
    image_id = admin_client.post('/api/admin/images', json={'dataUri': uri}).get_json()['id']

    listed = admin_client.get('/api/admin/images').get_json()
    assert [i['id'] for i in listed] == [image_id]
    assert 'data' not in listed[0]

    assert admin_client.delete(f'/api/admin/images/{image_id}').status_code == 200
    assert client.get(f'/api/images/{image_id}').status_code == 404
