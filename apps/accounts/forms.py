"""
Forms for accounts app.

Includes:
- LoginForm: Email/password login
- ProfileForm: Update own name and digest preference
"""

from django import forms

from .models import User


class LoginForm(forms.Form):
    """Login form using email address."""

    email = forms.EmailField(label='Email Address')
    password = forms.CharField(label='Password', strip=False)

    def clean_email(self):
        """Normalize email to lowercase."""
        return self.cleaned_data.get('email', '').lower().strip()


class ProfileForm(forms.ModelForm):
    """Fields a user may change on their own profile."""

    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'designation', 'email_digest_enabled']
