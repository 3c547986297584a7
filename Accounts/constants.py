# accounts/constants.py
class Role:
    OWNER = "OWNER"
    SUBADMIN = "SUBADMIN"

    CHOICES = (
        (OWNER, "Owner"),
        (SUBADMIN, "Sub-admin"),
    )
