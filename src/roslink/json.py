''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`. Every frame
    on the wire is a text frame, so unlike the underlying libraries the
    :func:`dumps` defined here always returns a str.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()

    def dumps(value):
        return encoder.encode(value).decode()

    loads = decoder.decode

elif orjson is not None:

    def dumps(value):
        return orjson.dumps(value).decode()

    loads = orjson.loads

else:

    def dumps(value):
        return json.dumps(value, separators=(',', ':'))

    loads = json.loads


# Decode errors are library-specific; collect them so callers can catch
# whichever one applies without caring which library was selected.

if msgspec is not None:
    DecodeError = (msgspec.DecodeError, UnicodeDecodeError)
elif orjson is not None:
    DecodeError = (orjson.JSONDecodeError, UnicodeDecodeError)
else:
    DecodeError = (json.JSONDecodeError, UnicodeDecodeError)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
