from django import forms

from enterprises.models import Enterprise

from .models import Customer


class CustomerForm(forms.ModelForm):
    class Meta:
        model = Customer
        fields = [
            "enterprise",
            "email",
            "code",
            "first_name",
            "last_name",
        ]

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        if user is not None:
            self.fields["enterprise"].queryset = Enterprise.objects.managed_by(user)
