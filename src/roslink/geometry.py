""" Minimal 3-D value types used to deliver coordinate-frame transforms.
    Constructors accept either an instance of the same class, or any mapping
    with the relevant keys (the form the values take on the wire); missing
    components take their identity value.
"""

import math


def _get(source, key, default):

    if source is None:
        return default

    try:
        value = source[key]
    except (KeyError, TypeError):
        value = getattr(source, key, default)

    if value is None:
        return default
    return value



class Vector3:

    def __init__(self, values=None):

        self.x = _get(values, 'x', 0)
        self.y = _get(values, 'y', 0)
        self.z = _get(values, 'z', 0)


    def __eq__(self, other):
        if isinstance(other, Vector3):
            return (self.x, self.y, self.z) == (other.x, other.y, other.z)
        return NotImplemented


    def __repr__(self):
        return 'Vector3(x=%r, y=%r, z=%r)' % (self.x, self.y, self.z)


    def add(self, v):
        self.x += v.x
        self.y += v.y
        self.z += v.z


    def subtract(self, v):
        self.x -= v.x
        self.y -= v.y
        self.z -= v.z


    def multiply_quaternion(self, q):
        """ Rotate this vector in place by the quaternion *q*.
        """

        ix = q.w * self.x + q.y * self.z - q.z * self.y
        iy = q.w * self.y + q.z * self.x - q.x * self.z
        iz = q.w * self.z + q.x * self.y - q.y * self.x
        iw = -q.x * self.x - q.y * self.y - q.z * self.z

        self.x = ix * q.w + iw * -q.x + iy * -q.z - iz * -q.y
        self.y = iy * q.w + iw * -q.y + iz * -q.x - ix * -q.z
        self.z = iz * q.w + iw * -q.z + ix * -q.y - iy * -q.x


    def clone(self):
        return Vector3(self)


    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'z': self.z}


# end of class Vector3



class Quaternion:

    def __init__(self, values=None):

        self.x = _get(values, 'x', 0)
        self.y = _get(values, 'y', 0)
        self.z = _get(values, 'z', 0)
        self.w = _get(values, 'w', 1)


    def __eq__(self, other):
        if isinstance(other, Quaternion):
            return (self.x, self.y, self.z, self.w) == (other.x, other.y, other.z, other.w)
        return NotImplemented


    def __repr__(self):
        return 'Quaternion(x=%r, y=%r, z=%r, w=%r)' % (self.x, self.y, self.z, self.w)


    def conjugate(self):
        self.x *= -1
        self.y *= -1
        self.z *= -1


    def normalize(self):

        length = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

        if length == 0:
            self.x = 0
            self.y = 0
            self.z = 0
            self.w = 1
        else:
            length = 1 / length
            self.x = self.x * length
            self.y = self.y * length
            self.z = self.z * length
            self.w = self.w * length


    def invert(self):
        self.conjugate()
        self.normalize()


    def multiply(self, q):
        """ Set this quaternion to the product of itself and *q*.
        """

        x = self.x * q.w + self.y * q.z - self.z * q.y + self.w * q.x
        y = -self.x * q.z + self.y * q.w + self.z * q.x + self.w * q.y
        z = self.x * q.y - self.y * q.x + self.z * q.w + self.w * q.z
        w = -self.x * q.x - self.y * q.y - self.z * q.z + self.w * q.w

        self.x = x
        self.y = y
        self.z = z
        self.w = w


    def clone(self):
        return Quaternion(self)


    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'z': self.z, 'w': self.w}


# end of class Quaternion



class Transform:

    def __init__(self, values=None):

        self.translation = Vector3(_get(values, 'translation', None))
        self.rotation = Quaternion(_get(values, 'rotation', None))


    def __eq__(self, other):
        if isinstance(other, Transform):
            return self.translation == other.translation and self.rotation == other.rotation
        return NotImplemented


    def __repr__(self):
        return 'Transform(translation=%r, rotation=%r)' % (self.translation, self.rotation)


    def clone(self):
        return Transform(self)


    def to_dict(self):
        return {'translation': self.translation.to_dict(), 'rotation': self.rotation.to_dict()}


# end of class Transform



class Pose:

    def __init__(self, values=None):

        self.position = Vector3(_get(values, 'position', None))
        self.orientation = Quaternion(_get(values, 'orientation', None))


    def __eq__(self, other):
        if isinstance(other, Pose):
            return self.position == other.position and self.orientation == other.orientation
        return NotImplemented


    def __repr__(self):
        return 'Pose(position=%r, orientation=%r)' % (self.position, self.orientation)


    def apply_transform(self, tf):
        """ Apply the :class:`Transform` *tf* to this pose, in place.
        """

        self.position.multiply_quaternion(tf.rotation)
        self.position.add(tf.translation)

        rotation = tf.rotation.clone()
        rotation.multiply(self.orientation)
        self.orientation = rotation


    def clone(self):
        return Pose(self)


    def to_dict(self):
        return {'position': self.position.to_dict(), 'orientation': self.orientation.to_dict()}


# end of class Pose


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
