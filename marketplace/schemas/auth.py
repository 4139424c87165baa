"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr
    password: str = Field(min_length=1)


class SignupResponse(BaseModel):
    message: str
    token: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    token: str


class RefreshRequest(BaseModel):
    refresh_token: str


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordResponse(BaseModel):
    otp: str


class OtpRequest(BaseModel):
    email: EmailStr
    otp: str


class OtpResponse(BaseModel):
    message: str
    token: str


class UpdatePasswordRequest(BaseModel):
    password: str = Field(min_length=1)
