# Design code provisions
from .base_code import DesignCode
from .is456 import IS456
