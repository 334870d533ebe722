from rest_framework import serializers


class LabelChoiceField(serializers.ChoiceField):
    """Accepts either the stored key ("HIGHER_BETTER") or its label ("Higher is better"), any case."""
    def to_internal_value(self, data):
        data_str = str(data).strip()
        if data_str in self.choices:
            return data_str
        for key, label in self.choices.items():
            if key.lower() == data_str.lower() or str(label).lower() == data_str.lower():
                return key
        self.fail('invalid_choice', input=data)
