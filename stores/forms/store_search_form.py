from django import forms


class StoreSearchForm(forms.Form):
    q = forms.CharField(max_length=255, strip=True)
