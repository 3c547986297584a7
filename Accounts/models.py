# accounts/models.py

from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    PermissionsMixin,
    BaseUserManager,
)

from .constants import Role


# ----------------------------------
# CUSTOM USER MANAGER
# ----------------------------------
# Creates admin accounts for the turf dashboard.
# Email is the login identifier.
class UserManager(BaseUserManager):

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email)
        extra_fields.setdefault("role", Role.SUBADMIN)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_owner(self, email, password=None, **extra_fields):
        extra_fields["role"] = Role.OWNER
        return self.create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", Role.OWNER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email, password, **extra_fields)


# ----------------------------------
# CUSTOM USER MODEL
# ----------------------------------
# Dashboard account: the turf owner or one of their sub-admins.
class User(AbstractBaseUser, PermissionsMixin):

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True)

    # OWNER manages sub-admins; both can manage bookings and expenses
    role = models.CharField(
        max_length=20,
        choices=Role.CHOICES,
        default=Role.SUBADMIN
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "email"

    class Meta:
        ordering = ["-created_at"]

    @property
    def is_owner(self):
        return self.role == Role.OWNER

    def __str__(self):
        return self.email
