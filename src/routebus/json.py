''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`.
'''

# msgspec is preferred; orjson is the fallback. Both are declared
# dependencies, the order only matters for installations that carry one.

msgspec = None
orjson = None

try:
    import msgspec
except ImportError:
    import orjson


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. Callers
# always receive bytes from dumps() and may pass bytes or str to loads().

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
else:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
