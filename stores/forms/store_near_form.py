from django import forms


class StoreNearForm(forms.Form):
    lat = forms.FloatField(min_value=-90, max_value=90)
    lng = forms.FloatField(min_value=-180, max_value=180)
    max_distance = forms.FloatField(min_value=0, required=False)
