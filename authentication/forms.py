import re

from django import forms


class LoginForm(forms.Form):
    email = forms.EmailField(
        error_messages={'invalid': 'Invalid email address'},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
        })
    )
    password = forms.CharField(
        min_length=6,
        error_messages={'min_length': 'Password must be at least 6 characters'},
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': '••••••••',
        })
    )

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class RegisterForm(forms.Form):
    """
    Sign-up form with the full password policy.
    The JSON endpoint only enforces the minimum length; browsers go through here.
    """

    full_name = forms.CharField(
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'John Doe',
        })
    )
    email = forms.EmailField(
        error_messages={'invalid': 'Invalid email address'},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
        })
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': '••••••••',
        })
    )
    confirm_password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': '••••••••',
        })
    )

    PASSWORD_RULES = [
        (r'[a-z]', 'Password must contain a lowercase letter'),
        (r'[A-Z]', 'Password must contain an uppercase letter'),
        (r'[0-9]', 'Password must contain a number'),
        (r'[^a-zA-Z0-9]', 'Password must contain a special character'),
    ]

    def clean_full_name(self):
        full_name = self.cleaned_data.get('full_name', '').strip()
        if len(full_name) < 2:
            raise forms.ValidationError('Full name is required')
        return full_name

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()

    def clean_password(self):
        password = self.cleaned_data.get('password', '')
        if len(password) < 8:
            raise forms.ValidationError('Password must be at least 8 characters')

        errors = [message for pattern, message in self.PASSWORD_RULES if not re.search(pattern, password)]
        if errors:
            raise forms.ValidationError(errors)
        return password

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')
        if password and confirm_password and password != confirm_password:
            self.add_error('confirm_password', 'Passwords do not match')
        return cleaned_data


class ForgotPasswordForm(forms.Form):
    email = forms.EmailField(
        error_messages={'invalid': 'Invalid email address'},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
        })
    )

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()
