from django import forms

from user_dashboard.models import KycRequest


class AdminLoginForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={'placeholder': 'Admin Email', 'autocomplete': 'email'})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'placeholder': 'Password'})
    )

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class KycRejectForm(forms.Form):
    reason = forms.CharField(
        required=False,
        max_length=1000,
        widget=forms.Textarea(attrs={'rows': 3, 'placeholder': 'Reason shown to the user'})
    )


KYC_FILTER_CHOICES = [
    (KycRequest.STATUS_PENDING_REVIEW, 'Pending'),
    (KycRequest.STATUS_APPROVED, 'Approved'),
    (KycRequest.STATUS_REJECTED, 'Rejected'),
    ('all', 'All'),
]
