""" Decoding for frames the server compressed as PNG images.

    The server packs the UTF-8 bytes of the real JSON message into the RGB
    channels of an image, three bytes per pixel, padding the tail with
    newlines to fill the last row. The image is sent base64 encoded in the
    'data' field of a message whose op is 'png'. Alpha channels, if the
    encoder produced one, carry no data.
"""

import base64
import binascii
import io
import math

import numpy
from PIL import Image, UnidentifiedImageError

_PADDING = '\n\x00'


def decompress(data):
    """ Return the JSON text packed into the base64-encoded PNG *data*.
        Raises ValueError if *data* is not a decodable image.
    """

    if isinstance(data, str):
        pass
    elif isinstance(data, (bytes, bytearray)):
        pass
    else:
        raise ValueError('PNG payload must be a base64 string, not ' + type(data).__name__)

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise ValueError('PNG payload is not valid base64: ' + str(e)) from e

    try:
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ValueError('PNG payload is not a readable image: ' + str(e)) from e

    pixels = numpy.asarray(image.convert('RGB'), dtype=numpy.uint8)
    packed = pixels.reshape(-1).tobytes()

    try:
        text = packed.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ValueError('PNG payload does not contain UTF-8 text') from e

    return text.rstrip(_PADDING)



def encode(text):
    """ Pack *text* into a PNG image the same way the server does, and return
        the base64 encoding of that image. This is the inverse of
        :func:`decompress`.
    """

    raw = text.encode('utf-8')
    length = len(raw)

    # Aim for a roughly square image.

    width = int(math.floor(math.sqrt(length / 3.0)))
    width = max(width, 1)
    height = int(math.ceil((length / 3.0) / width))
    height = max(height, 1)

    needed = width * height * 3
    raw = raw + b'\n' * (needed - length)

    pixels = numpy.frombuffer(raw, dtype=numpy.uint8)
    pixels = pixels.reshape((height, width, 3))
    image = Image.fromarray(pixels)

    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return base64.b64encode(buffer.getvalue()).decode('ascii')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
