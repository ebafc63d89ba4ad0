from django import forms

from .models import OrderCycle


class OrderCycleForm(forms.ModelForm):
    class Meta:
        model = OrderCycle
        fields = ["name", "coordinator", "orders_open_at", "orders_close_at"]

    def clean(self):
        cleaned_data = super().clean()
        opens = cleaned_data.get("orders_open_at")
        closes = cleaned_data.get("orders_close_at")
        if opens and closes and closes <= opens:
            raise forms.ValidationError({"orders_close_at": "Orders must close after they open."})
        return cleaned_data
