# accounts/models.py
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone

from common.roles import UserType


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, phone, user_type=UserType.CONSUMER, password=None, **extra_fields):
        if not phone:
            raise ValueError("Users must have a phone number")
        user = self.model(phone=phone, user_type=user_type, **extra_fields)
        # OTP-only accounts never log in with a password
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_verified", True)
        return self.create_user(phone, user_type=UserType.CONSUMER, password=password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Phone-identified account. A user is either a consumer or a partner
    (store owner); partners own exactly one PartnerStore.
    """

    phone = models.CharField(max_length=15, unique=True)
    user_type = models.CharField(max_length=16, choices=UserType.choices, db_index=True)
    first_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    zip_code = models.CharField(max_length=16, blank=True, default="")
    favorite_categories = models.JSONField(default=list, blank=True)

    is_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "phone"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.phone} ({self.user_type})"

    @property
    def full_name(self) -> str:
        return " ".join(p for p in [self.first_name, self.last_name] if p).strip()

    @property
    def is_consumer(self) -> bool:
        return self.user_type == UserType.CONSUMER

    @property
    def is_partner(self) -> bool:
        return self.user_type == UserType.PARTNER
