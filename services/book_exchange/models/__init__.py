from .users import User
from .classes import SchoolClass
from .books import Book
from .announcements import Announcement
